# File: employee_records/client/errors.py

"""
Client-side error normalization.

Every failed call, whatever went wrong, becomes a ParsedError with a
message to show, a code (when one is known) and per-field details.
`parse_error` is total and never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

import httpx

logger = logging.getLogger(__name__)

NETWORK_ERROR = "NETWORK_ERROR"
UNKNOWN_ERROR = "UNKNOWN_ERROR"
NETWORK_MESSAGE = "Network error. Please check your connection."
UNKNOWN_MESSAGE = "An unexpected error occurred"


class FailureShape(Enum):
    ENVELOPE = "envelope"
    LEGACY_MESSAGE = "legacy_message"
    UNRECOGNIZED_RESPONSE = "unrecognized_response"
    NETWORK = "network"
    UNKNOWN = "unknown"


@dataclass
class ParsedError:
    message: str
    code: Optional[str] = None
    details: List[dict] = field(default_factory=list)
    status: Optional[int] = None


class ApiError(Exception):
    """Raised by EmployeeClient.call with the normalized failure attached."""

    def __init__(self, parsed: ParsedError):
        super().__init__(parsed.message)
        self.parsed = parsed


def _response_of(exc: BaseException) -> Optional[httpx.Response]:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response
    return None


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _envelope_error(body: Any) -> Optional[dict]:
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"]
    return None


def _legacy_message(body: Any) -> Optional[str]:
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return None


def classify_failure(exc: BaseException) -> FailureShape:
    response = _response_of(exc)
    if response is not None:
        body = _json_body(response)
        if _envelope_error(body) is not None:
            return FailureShape.ENVELOPE
        if _legacy_message(body) is not None:
            return FailureShape.LEGACY_MESSAGE
        return FailureShape.UNRECOGNIZED_RESPONSE
    # Transport failures: a request was made, no response came back
    if isinstance(exc, httpx.RequestError):
        return FailureShape.NETWORK
    return FailureShape.UNKNOWN


def _parse(exc: BaseException) -> ParsedError:
    shape = classify_failure(exc)

    if shape is FailureShape.ENVELOPE:
        response = _response_of(exc)
        error = _envelope_error(_json_body(response))
        details = error.get("details") or []
        return ParsedError(
            message=str(error.get("message") or f"Server error ({response.status_code})"),
            code=error.get("code"),
            details=list(details) if isinstance(details, list) else [],
            status=response.status_code,
        )

    if shape is FailureShape.LEGACY_MESSAGE:
        response = _response_of(exc)
        return ParsedError(
            message=_legacy_message(_json_body(response)),
            status=response.status_code,
        )

    if shape is FailureShape.UNRECOGNIZED_RESPONSE:
        response = _response_of(exc)
        return ParsedError(
            message=f"Server error ({response.status_code})",
            status=response.status_code,
        )

    if shape is FailureShape.NETWORK:
        return ParsedError(message=NETWORK_MESSAGE, code=NETWORK_ERROR)

    return ParsedError(message=str(exc) or UNKNOWN_MESSAGE, code=UNKNOWN_ERROR)


def parse_error(exc: Any) -> ParsedError:
    """
    Normalize a failed call into a ParsedError.

    1. error-envelope body     -> its message, code and details
    2. legacy {"message"} body -> that message, no code
    3. any other response      -> "Server error (<status>)"
    4. no response at all      -> NETWORK_ERROR
    5. anything else           -> UNKNOWN_ERROR
    """
    if not isinstance(exc, BaseException):
        return ParsedError(message=UNKNOWN_MESSAGE, code=UNKNOWN_ERROR)
    try:
        parsed = _parse(exc)
    except Exception:  # noqa: BLE001
        parsed = ParsedError(message=UNKNOWN_MESSAGE, code=UNKNOWN_ERROR)
    logger.debug("Normalized client error: %s", parsed)
    return parsed


def format_validation_errors(details: Any) -> Optional[str]:
    if not details or not isinstance(details, list):
        return None
    return "\n".join(f"{d.get('field')}: {d.get('message')}" for d in details if isinstance(d, dict))


def describe_error(parsed: ParsedError) -> str:
    """Message plus the per-field breakdown, ready to display."""
    text = parsed.message
    breakdown = format_validation_errors(parsed.details)
    if breakdown:
        text += "\n\nDetails:\n" + breakdown
    return text
