# File: employee_records/services/employee_service.py

"""
Employee persistence and list-query composition.

The list query combines three optional parts:
  - search: case-insensitive substring over name/email/position (OR)
  - sort:   "salary" high→low, "name" A→Z, any other known column A→Z
  - page/limit: 1-based offset pagination
String columns always sort case-insensitively.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import String, func, or_, select
from sqlalchemy.orm import Session

from employee_records.core.errors import not_found
from employee_records.models.employee import Employee
from employee_records.schemas.employee import EmployeeIn

DEFAULT_LIMIT = 5
MAX_LIMIT = 100
MAX_PAGE = 2**31 - 1

SEARCH_COLUMNS = (Employee.name, Employee.email, Employee.position)

# camelCase names as they appear in responses
SORT_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


@dataclass
class EmployeePageResult:
    items: List[Employee]
    total: int
    page: int
    total_pages: int


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def _search_clause(search: str):
    return or_(*(col.icontains(search, autoescape=True) for col in SEARCH_COLUMNS))


def _sort_clause(sort: Optional[str]):
    if not sort:
        return None

    if sort == "salary":
        return Employee.salary.desc()

    column = Employee.__table__.columns.get(SORT_ALIASES.get(sort, sort))
    if column is None:
        # Unknown field: keep insertion order
        return None
    if isinstance(column.type, String):
        return func.lower(column).asc()
    return column.asc()


def list_employees(
    db: Session,
    *,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = 1,
    limit: int = DEFAULT_LIMIT,
) -> EmployeePageResult:
    stmt = select(Employee)
    count_stmt = select(func.count()).select_from(Employee)

    if search:
        clause = _search_clause(search)
        stmt = stmt.where(clause)
        count_stmt = count_stmt.where(clause)

    order = _sort_clause(sort)
    if order is not None:
        stmt = stmt.order_by(order, Employee.id)
    else:
        stmt = stmt.order_by(Employee.id)

    stmt = stmt.offset((page - 1) * limit).limit(limit)

    items = list(db.scalars(stmt).all())
    total = db.scalar(count_stmt) or 0

    return EmployeePageResult(
        items=items,
        total=total,
        page=page,
        total_pages=total_pages(total, limit),
    )


def get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if employee is None:
        raise not_found("Employee")
    return employee


def create_employee(db: Session, payload: EmployeeIn) -> Employee:
    employee = Employee(**payload.model_dump())
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def update_employee(db: Session, employee_id: int, payload: EmployeeIn) -> Employee:
    employee = get_employee(db, employee_id)
    for field, value in payload.model_dump().items():
        setattr(employee, field, value)
    db.commit()
    db.refresh(employee)
    return employee


def delete_employee(db: Session, employee_id: int) -> None:
    employee = get_employee(db, employee_id)
    db.delete(employee)
    db.commit()
