# File: employee_records/schemas/user.py

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


# Presence and format checks for these bodies live in auth_service.

class RegisterRequest(BaseModel):
    username: Optional[Any] = None
    email: Optional[Any] = None
    password: Optional[Any] = None


class LoginRequest(BaseModel):
    email: Optional[Any] = None
    password: Optional[Any] = None


class UserPublic(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: UserPublic
