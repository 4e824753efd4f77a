# File: employee_records/core/security.py

"""
Security helpers for the Employee Records API.

Password hashing uses Argon2 (salted per hash). Access tokens are HS256
JWTs signed with the configured secret. Decoding leaves PyJWT's own
exceptions untouched so callers can tell an expired token from a
malformed one.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from employee_records.core.config import Settings

_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def create_access_token(
    data: dict,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign `data` into a JWT that expires after `expires_delta`
    (default: settings.jwt_expire_minutes).
    """
    to_encode: dict[str, Any] = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises jwt.ExpiredSignatureError or jwt.InvalidTokenError.
    """
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
