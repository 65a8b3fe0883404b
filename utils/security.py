"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT access token creation/verification via PyJWT (HS256)
- Opaque refresh token generation from the OS CSPRNG
"""
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError

from utils.exceptions import (
    HashingError,
    InvalidCredentials,
    RandomnessError,
    SigningError,
    Unauthorized,
)

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
REFRESH_TOKEN_BYTES = 32

ph = PasswordHasher()

# verified against when the email is unknown so both login failures cost the same
DUMMY_HASH = ph.hash("not-a-real-password")


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2. Salt and parameters are
    embedded in the returned string.
    """
    try:
        return ph.hash(password)
    except Argon2HashingError as exc:
        logger.exception("argon2 failed to hash password")
        raise HashingError() from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password using argon2
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def burn_password_check(password: str) -> None:
    """Run a full argon2 verify against DUMMY_HASH and discard the result."""
    verify_password(password, DUMMY_HASH)


def check_password(password: str, password_hash: str) -> bool:
    """Like verify_password but raises InvalidCredentials on mismatch."""
    if not verify_password(password, password_hash):
        raise InvalidCredentials()
    return True


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    subject: str,
    email: str,
    display_name: str,
    ttl_minutes: int,
    secret_key: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Build and sign an access token.

    Claims: sub, email, fullName and exp (Unix seconds, now + ttl).
    Raises SigningError when the secret is empty or PyJWT refuses to sign.
    """
    if not secret_key:
        raise SigningError("JWT secret key is empty")
    issued = now or _now()
    payload = {
        "sub": str(subject),
        "email": email,
        "fullName": display_name,
        "exp": int((issued + timedelta(minutes=ttl_minutes)).timestamp()),
    }
    try:
        return jwt.encode(payload, secret_key, algorithm=JWT_ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as exc:
        logger.exception("failed to sign access token")
        raise SigningError() from exc


def decode_access_token(token: str, secret_key: str) -> Dict[str, Any]:
    """
    Decode and validate an access token. A token is accepted only if the
    signature matches secret_key and the current time is before exp.
    """
    if not token:
        raise Unauthorized("Missing token")
    try:
        return jwt.decode(
            token,
            secret_key,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise Unauthorized("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        logger.info("rejected access token: %s", exc)
        raise Unauthorized("Invalid token") from exc


def generate_refresh_token() -> str:
    """Return 32 random bytes as 64 lowercase hex characters."""
    try:
        return secrets.token_hex(REFRESH_TOKEN_BYTES)
    except (OSError, NotImplementedError) as exc:
        logger.exception("secure random source unavailable")
        raise RandomnessError() from exc
