# File: employee_records/services/auth_service.py

"""
Authentication service.

  - Registration (presence, email format, password length, uniqueness)
  - Credential check by email + password hash
  - Token issuance

Unknown email and wrong password produce the same error.
"""

import logging
import re
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from employee_records.core.config import Settings
from employee_records.core.errors import validation_error
from employee_records.core.security import create_access_token, hash_password, verify_password
from employee_records.models.user import User

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid email or password"


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == email)).first()


def register_user(db: Session, *, username: Any, email: Any, password: Any) -> User:
    if not username or not email or not password:
        raise validation_error("All fields are required")

    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        raise validation_error("Please provide a valid email address")

    if len(str(password)) < MIN_PASSWORD_LENGTH:
        raise validation_error(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    if get_user_by_email(db, email) is not None:
        raise validation_error("User with this email already exists")

    user = User(
        username=str(username),
        email=email,
        password_hash=hash_password(str(password)),
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return user


def authenticate_user(db: Session, *, email: Any, password: Any) -> User:
    if not email or not password:
        raise validation_error("Email and password are required")

    user = get_user_by_email(db, str(email))
    if user is None or not verify_password(str(password), user.password_hash):
        raise validation_error(INVALID_CREDENTIALS)
    return user


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token({"id": user.id}, settings)
