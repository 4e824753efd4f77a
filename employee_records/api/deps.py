# File: employee_records/api/deps.py

from collections.abc import Generator
from typing import Any, Optional

import jwt
from fastapi import Header, Request
from sqlalchemy.orm import Session

from employee_records.core.config import Settings
from employee_records.core.errors import authentication_error
from employee_records.core.security import decode_access_token


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session from the
    application's Database.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    yield from request.app.state.db.session()


def _extract_bearer_token(authorization: str) -> Optional[str]:
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def require_user(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> dict[str, Any]:
    """
    Admission check for protected routes.

    Verifies the bearer token's signature and expiry. The decoded claims
    are stored on request.state.user and returned. No database access.
    """
    if not authorization or not authorization.strip():
        raise authentication_error("No authentication token provided")

    token = _extract_bearer_token(authorization)
    if token is None:
        raise authentication_error("Invalid authentication token")

    try:
        claims = decode_access_token(token, get_settings(request))
    except jwt.ExpiredSignatureError as exc:
        raise authentication_error("Authentication token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise authentication_error("Invalid authentication token") from exc

    request.state.user = claims
    return claims
