# server/core/security.py

from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from passlib.context import CryptContext
from core.config import get_settings
from core.errors import InvalidToken


settings = get_settings()

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


# -------------------------------
# Password Hashing
# -------------------------------

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# -------------------------------
# Session Tokens
# -------------------------------

def create_access_token(
    user_id: int,
    issued_at: datetime | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Signs a stateless session token carrying the user id.
    Expiry defaults to ACCESS_TOKEN_EXPIRE_MINUTES after issuance.
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {"userId": user_id, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, secret: str | None = None) -> int:
    """
    Returns the user id of a token whose signature and expiry both check out.
    Anything else raises InvalidToken.
    """
    try:
        payload = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require_exp": True},
        )
    except JWTError:
        raise InvalidToken()

    user_id = payload.get("userId")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidToken()
    return user_id
