# File: employee_records/api/routes/auth.py

"""
Auth API routes: account registration and token login.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from employee_records.api.deps import get_db, get_settings
from employee_records.core.config import Settings
from employee_records.schemas.envelope import MessageResponse
from employee_records.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserPublic
from employee_records.services import auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(
    payload: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    request.state.body = payload.model_dump()
    auth_service.register_user(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return MessageResponse(message="User created successfully!")


@router.post("/login", response_model=LoginResponse, summary="Log in and get a token")
def login(
    payload: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange email + password for a bearer token valid for
    settings.jwt_expire_minutes.
    """
    request.state.body = payload.model_dump()
    user = auth_service.authenticate_user(db, email=payload.email, password=payload.password)
    token = auth_service.issue_token(user, settings)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))
