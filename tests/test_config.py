import pytest

from core.config import ConfigError, load_settings


def test_missing_jwt_secret_fails_fast(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ConfigError):
        load_settings()


def test_empty_jwt_secret_fails_fast(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "")
    with pytest.raises(ConfigError):
        load_settings()


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "abc")
    monkeypatch.setenv("PORT", "3000")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("TOTP_VALID_WINDOW", "2")

    settings = load_settings()

    assert settings.jwt_secret == "abc"
    assert settings.port == 3000
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.totp_valid_window == 2
    assert settings.access_token_expire_minutes == 60


def test_defaults(monkeypatch):
    for name in ("PORT", "CORS_ORIGINS", "ACCESS_TOKEN_EXPIRE_MINUTES", "TOTP_INTERVAL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("JWT_SECRET", "abc")

    settings = load_settings()

    assert settings.port == 8000
    assert settings.cors_origins == ["*"]
    assert settings.totp_interval == 30
    assert settings.jwt_algorithm == "HS256"
