# server/core/totp.py

import base64
import hashlib
import hmac
import secrets
import time
from core.config import get_settings


SECRET_BYTES = 20
DIGITS = 6


def generate_otp_secret() -> str:
    """
    Returns a fresh base32 shared secret (20 random bytes, 32 characters).
    """
    return base64.b32encode(secrets.token_bytes(SECRET_BYTES)).decode("ascii")


def _decode_secret(secret: str) -> bytes:
    normalized = secret.replace(" ", "").upper()
    padded = normalized + "=" * ((8 - len(normalized) % 8) % 8)
    return base64.b32decode(padded)


def generate_totp(secret: str, for_time: float | None = None, interval: int | None = None) -> str:
    """
    RFC 6238 code (HMAC-SHA1, 6 digits) for the step containing for_time.
    """
    interval = interval or get_settings().totp_interval
    for_time = time.time() if for_time is None else for_time

    counter = int(for_time // interval).to_bytes(8, "big")
    digest = hmac.new(_decode_secret(secret), counter, hashlib.sha1).digest()
    offset = digest[-1] & 0x0F
    code = (int.from_bytes(digest[offset:offset + 4], "big") & 0x7FFFFFFF) % (10 ** DIGITS)
    return str(code).zfill(DIGITS)


def verify_totp(
    secret: str,
    code: str | None,
    for_time: float | None = None,
    window: int | None = None,
    interval: int | None = None,
) -> bool:
    """
    Checks a code against the current step and `window` steps either side.
    """
    if not code:
        return False
    code = code.strip()
    if len(code) != DIGITS or not code.isdigit():
        return False

    settings = get_settings()
    interval = interval or settings.totp_interval
    window = settings.totp_valid_window if window is None else window
    for_time = time.time() if for_time is None else for_time

    for step in range(-window, window + 1):
        candidate = generate_totp(secret, for_time + step * interval, interval)
        if hmac.compare_digest(candidate, code):
            return True
    return False
