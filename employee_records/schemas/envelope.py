# File: employee_records/schemas/envelope.py

"""
Response envelopes shared by every endpoint.

Success bodies always carry `success: true`; error bodies always follow
ErrorEnvelope so a client can parse either without knowing the route.
"""

from typing import Any, List, Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class FieldDetail(BaseModel):
    field: str
    message: str
    value: Any = None


class ErrorBody(BaseModel):
    message: str
    code: str
    details: Optional[List[FieldDetail]] = None
    stack: Optional[str] = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: ErrorBody
