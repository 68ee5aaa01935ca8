"""
Password hashing and token helpers.

Passwords are stored as bcrypt hashes; tokens are HS256 JWTs carrying
{ username, isAdmin }.
"""

from datetime import UTC, datetime, timedelta
from functools import lru_cache

import bcrypt
import jwt

from jobly.config import settings
from jobly.errors import BadRequestError

# Longest password bcrypt accepts
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with bcrypt at the configured work factor.

    Raises BadRequestError if the password is longer than bcrypt accepts.
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise BadRequestError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a bcrypt hash (constant-time).

    A password too long to have been hashed never matches.
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed.encode("utf-8"))


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash to check against when the user does not exist, so both failures cost the same."""
    return hash_password("not-a-real-password")


def create_token(user: dict) -> str:
    """Sign a token for a user record."""
    now = datetime.now(UTC)
    payload = {
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Verify and decode a token. Raises jwt.PyJWTError if invalid or expired."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
