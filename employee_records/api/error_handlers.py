# File: employee_records/api/error_handlers.py

"""
Centralized error handling for the API.

Every exception that escapes a route, whether an AppError, a FastAPI
validation error, a SQLAlchemy or PyJWT error, or anything else, goes
through `classify` and comes out as one ErrorEnvelope with a status code.
Routes never build failure responses themselves.
"""

import logging
import math
import re
import traceback
from datetime import datetime, timezone
from typing import Any

import jwt
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_records.core.errors import (
    AppError,
    FieldError,
    authentication_error,
    database_error,
    internal_error,
    validation_error,
)
from employee_records.schemas.envelope import ErrorBody, ErrorEnvelope, FieldDetail

logger = logging.getLogger(__name__)

REDACTED = "***"
SENSITIVE_FIELDS = {"password", "password_hash", "token"}

# sqlite: "UNIQUE constraint failed: employees.email"
# postgres: "Key (email)=(a@b.co) already exists."
_UNIQUE_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: \w+\.(\w+)"),
    re.compile(r"Key \((\w+)\)=\(.*\) already exists"),
    re.compile(r"Duplicate entry .* for key '(?:\w+\.)?(\w+)'"),
)
# sqlite: "NOT NULL constraint failed: employees.name"
# postgres: 'null value in column "name" ... violates not-null constraint'
_NOT_NULL_PATTERNS = (
    re.compile(r"NOT NULL constraint failed: \w+\.(\w+)"),
    re.compile(r'null value in column "(\w+)"'),
)
_CHECK_PATTERN = re.compile(r"CHECK constraint failed: (\w+)|violates check constraint \"(\w+)\"")


# -----------------------------
# Classification
# -----------------------------

def _field_from_loc(loc: tuple) -> str:
    # ("body", "salary") -> "salary"; ("query", "page") -> "page"
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def _json_safe(value: Any) -> Any:
    # inf/NaN have no JSON form; echo them back as text
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def _classify_request_validation(exc: RequestValidationError) -> AppError:
    errors = exc.errors()
    if any(err.get("loc", ("",))[0] == "path" for err in errors):
        return validation_error("Invalid ID format")

    details = []
    for err in errors:
        value = None if err.get("type") == "missing" else _json_safe(err.get("input"))
        details.append(
            FieldError(field=_field_from_loc(tuple(err.get("loc", ()))), message=err.get("msg", ""), value=value)
        )
    return validation_error("Validation failed", details)


def _first_match(patterns, text: str) -> str | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return next(g for g in match.groups() if g)
    return None


def _classify_integrity(exc: IntegrityError) -> AppError:
    text = str(exc.orig) if exc.orig is not None else str(exc)

    field = _first_match(_UNIQUE_PATTERNS, text)
    if field:
        return validation_error(f"{field} already exists. Please use a different {field}.")

    field = _first_match(_NOT_NULL_PATTERNS, text)
    if field:
        return validation_error(
            "Validation failed",
            [FieldError(field=field, message=f"{field.capitalize()} is required")],
        )

    if _CHECK_PATTERN.search(text):
        return validation_error("Validation failed")

    return database_error()


def classify(exc: BaseException) -> AppError:
    """
    Map any exception onto the error taxonomy. Total: the last branch
    accepts whatever the earlier ones did not.
    """
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, RequestValidationError):
        return _classify_request_validation(exc)
    if isinstance(exc, IntegrityError):
        return _classify_integrity(exc)
    if isinstance(exc, SQLAlchemyError):
        return database_error()
    # ExpiredSignatureError subclasses InvalidTokenError; order matters
    if isinstance(exc, jwt.ExpiredSignatureError):
        return authentication_error("Token expired")
    if isinstance(exc, jwt.InvalidTokenError):
        return authentication_error("Invalid token")
    if isinstance(exc, StarletteHTTPException):
        return internal_error(str(exc.detail), status_code=exc.status_code)
    return internal_error(status_code=getattr(exc, "status_code", None))


# -----------------------------
# Envelope
# -----------------------------

def build_error_envelope(error: AppError, exc: BaseException, *, include_stack: bool = False) -> dict:
    body = ErrorBody(
        message=error.message,
        code=error.code,
        details=[FieldDetail(**d.to_dict()) for d in error.details] or None,
        stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        if include_stack
        else None,
    )
    return ErrorEnvelope(error=body).model_dump(mode="json", exclude_none=True)


# -----------------------------
# Diagnostics
# -----------------------------

def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: REDACTED if k in SENSITIVE_FIELDS else _redact(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact(v) for v in value]
    return value


def _request_body(request: Request, exc: BaseException) -> Any:
    body = getattr(request.state, "body", None)
    if body is None and isinstance(exc, RequestValidationError):
        body = exc.body
    return _redact(body)


def log_diagnostic(request: Request, error: AppError, exc: BaseException) -> None:
    """Best-effort: never raises, never changes the response."""
    try:
        user = getattr(request.state, "user", None)
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "route": request.url.path,
            "method": request.method,
            "status": error.status_code,
            "code": error.code,
            "message": error.message,
            "user": user.get("id") if isinstance(user, dict) else "Not authenticated",
            "body": _request_body(request, exc),
        }
        if error.status_code >= 500:
            logger.error("Request failed | %s", record, exc_info=exc)
        else:
            logger.warning("Request failed | %s", record)
    except Exception:  # noqa: BLE001
        pass


# -----------------------------
# Registration
# -----------------------------

def register_error_handlers(app: FastAPI, *, include_stack: bool = False) -> None:
    """
    Route every error family through one handler.

    Args:
        app: The FastAPI application instance.
        include_stack: Add formatted tracebacks to envelopes (development only).
    """

    async def handle_error(request: Request, exc: Exception) -> JSONResponse:
        error = classify(exc)
        log_diagnostic(request, error, exc)
        content = build_error_envelope(error, exc, include_stack=include_stack)
        headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
        return JSONResponse(status_code=error.status_code, content=content, headers=headers)

    for exc_class in (
        AppError,
        RequestValidationError,
        StarletteHTTPException,
        SQLAlchemyError,
        jwt.PyJWTError,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_error)
