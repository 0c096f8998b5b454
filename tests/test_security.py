from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from core.errors import InvalidToken
from core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_is_salted_and_verifies():
    first = get_password_hash("hunter2")
    second = get_password_hash("hunter2")

    assert first != second
    assert first.startswith("$2")
    assert verify_password("hunter2", first)
    assert not verify_password("hunter3", first)


def test_token_decodes_to_user_id():
    token = create_access_token(42)
    assert decode_access_token(token) == 42


def test_token_still_valid_just_before_one_hour():
    issued = datetime.now(timezone.utc) - timedelta(minutes=59)
    token = create_access_token(7, issued_at=issued)
    assert decode_access_token(token) == 7


def test_token_rejected_just_after_one_hour():
    issued = datetime.now(timezone.utc) - timedelta(minutes=61)
    token = create_access_token(7, issued_at=issued)
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected():
    token = create_access_token(7)
    with pytest.raises(InvalidToken):
        decode_access_token(token, secret="another-secret")


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_token_without_user_id_is_rejected():
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"sub": "alice", "exp": exp}, "test-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        decode_access_token(token)
