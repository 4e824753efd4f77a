# File: employee_records/schemas/employee.py

import math
import re
from datetime import datetime
from typing import Any, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

MOBILE_PATTERN = re.compile(r"[0-9]{10}")
NUMERIC_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")


# -----------------------------
# Request payload
# -----------------------------

class EmployeeIn(BaseModel):
    """
    Create/update payload.

    Every field is checked even when an earlier one fails, so a single
    request reports all of its problems at once.
    """

    model_config = ConfigDict(validate_default=True)

    name: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None
    salary: Optional[float] = None

    @field_validator("name", "position", mode="before")
    @classmethod
    def require_text(cls, v: Any, info):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str) or not v.strip():
            label = info.field_name.capitalize()
            raise PydanticCustomError("required", f"{label} is required.")
        return v.strip()

    @field_validator("mobile", mode="before")
    @classmethod
    def check_mobile(cls, v: Any):
        if v is None or v == "":
            raise PydanticCustomError("required", "Mobile is required.")
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str) or not MOBILE_PATTERN.fullmatch(v):
            raise PydanticCustomError("mobile_format", "Mobile must be 10 digits.")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any):
        if not isinstance(v, str):
            raise PydanticCustomError("email_format", "Valid email is required.")
        try:
            validate_email(v.strip(), check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email_format", "Valid email is required.")
        return v.strip().lower()

    @field_validator("salary", mode="before")
    @classmethod
    def check_salary(cls, v: Any):
        if isinstance(v, bool):
            raise PydanticCustomError("salary_type", "Salary must be a number.")
        if isinstance(v, str) and NUMERIC_PATTERN.fullmatch(v.strip()):
            v = float(v)
        if not isinstance(v, (int, float)):
            raise PydanticCustomError("salary_type", "Salary must be a number.")
        try:
            v = float(v)
        except OverflowError:
            raise PydanticCustomError("salary_type", "Salary must be a number.")
        # inf/NaN from 1e999, NaN literals or very long digit strings
        if not math.isfinite(v):
            raise PydanticCustomError("salary_type", "Salary must be a number.")
        if v < 0:
            raise PydanticCustomError("salary_range", "Salary must be positive.")
        return v


# -----------------------------
# DB-layer serializers
# -----------------------------

def _camel(name: str, camel: str):
    # accepts ORM attribute names and the camelCase names we emit
    return Field(validation_alias=AliasChoices(name, camel), serialization_alias=camel)


class EmployeeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    mobile: str
    email: str
    position: str
    salary: float
    created_at: datetime = _camel("created_at", "createdAt")
    updated_at: datetime = _camel("updated_at", "updatedAt")


class EmployeeResponse(BaseModel):
    success: bool = True
    data: EmployeeRead
    message: str


class EmployeePage(BaseModel):
    success: bool = True
    data: List[EmployeeRead]
    total: int
    page: int
    total_pages: int = _camel("total_pages", "totalPages")
