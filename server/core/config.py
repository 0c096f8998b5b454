# server/core/config.py

import os
from functools import lru_cache
from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()


class ConfigError(RuntimeError):
    pass


class Settings(BaseModel):
    """
    Runtime configuration read from the environment (and .env, if present).
    """
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    database_url: str = "sqlite:///./data/app.db"
    bcrypt_rounds: int = 10
    totp_interval: int = 30
    totp_valid_window: int = 1
    cors_origins: list[str] = ["*"]
    port: int = 8000
    log_level: str = "INFO"


def load_settings() -> Settings:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise ConfigError("JWT_SECRET must be set before the server starts")

    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        jwt_secret=secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./data/app.db"),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
        totp_interval=int(os.getenv("TOTP_INTERVAL", "30")),
        totp_valid_window=int(os.getenv("TOTP_VALID_WINDOW", "1")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
