# File: employee_records/core/errors.py

"""
Error taxonomy shared by every route.

Each failure the API reports is an AppError tagged with one ErrorKind.
The kind fixes the HTTP status and the machine-readable code; the error
carries the human message and, for validation failures, per-field details.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    VALIDATION = (400, "VALIDATION_ERROR")
    AUTHENTICATION = (401, "AUTH_ERROR")
    AUTHORIZATION = (403, "AUTHORIZATION_ERROR")
    NOT_FOUND = (404, "NOT_FOUND")
    DATABASE = (500, "DATABASE_ERROR")
    INTERNAL = (500, "INTERNAL_ERROR")

    def __init__(self, status_code: int, code: str):
        self.status_code = status_code
        self.code = code


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message, "value": self.value}


class AppError(Exception):
    """A classified failure, ready to be rendered as an error envelope."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: list[FieldError] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = list(details) if details else []
        # Only INTERNAL errors wrapping a foreign HTTP status override this
        self.status_code = status_code or kind.status_code

    @property
    def code(self) -> str:
        return self.kind.code

    def __repr__(self) -> str:
        return f"AppError({self.kind.name}, {self.message!r}, status={self.status_code})"


# -----------------------------
# Factories
# -----------------------------

def validation_error(message: str, details: list[FieldError] | None = None) -> AppError:
    return AppError(ErrorKind.VALIDATION, message, details)


def authentication_error(message: str = "Authentication failed") -> AppError:
    return AppError(ErrorKind.AUTHENTICATION, message)


def authorization_error(message: str = "Access denied") -> AppError:
    return AppError(ErrorKind.AUTHORIZATION, message)


def not_found(resource: str = "Resource") -> AppError:
    return AppError(ErrorKind.NOT_FOUND, f"{resource} not found")


def database_error(message: str = "Database operation failed") -> AppError:
    return AppError(ErrorKind.DATABASE, message)


def internal_error(
    message: str = "Internal Server Error", status_code: int | None = None
) -> AppError:
    return AppError(ErrorKind.INTERNAL, message, status_code=status_code)
