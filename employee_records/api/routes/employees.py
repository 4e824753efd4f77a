# File: employee_records/api/routes/employees.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from employee_records.api.deps import get_db, require_user
from employee_records.schemas.employee import EmployeeIn, EmployeePage, EmployeeRead, EmployeeResponse
from employee_records.schemas.envelope import MessageResponse
from employee_records.services import employee_service

router = APIRouter(dependencies=[Depends(require_user)])


@router.get("", response_model=EmployeePage, summary="List employees")
def list_employees(
    db: Session = Depends(get_db),
    search: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = Query(1, ge=1, le=employee_service.MAX_PAGE),
    limit: int = Query(employee_service.DEFAULT_LIMIT, ge=1, le=employee_service.MAX_LIMIT),
):
    """
    Search, sort and paginate the employee collection.

    A page past the last one returns an empty `data` list; `total`
    still counts every match.
    """
    result = employee_service.list_employees(
        db, search=search, sort=sort, page=page, limit=limit
    )
    return EmployeePage(
        data=[EmployeeRead.model_validate(e) for e in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
)
def create_employee(
    payload: EmployeeIn,
    request: Request,
    db: Session = Depends(get_db),
):
    request.state.body = payload.model_dump()
    employee = employee_service.create_employee(db, payload)
    return EmployeeResponse(
        data=EmployeeRead.model_validate(employee),
        message="Employee created successfully",
    )


@router.put("/{employee_id}", response_model=EmployeeResponse, summary="Update employee")
def update_employee(
    employee_id: int,
    payload: EmployeeIn,
    request: Request,
    db: Session = Depends(get_db),
):
    request.state.body = payload.model_dump()
    employee = employee_service.update_employee(db, employee_id, payload)
    return EmployeeResponse(
        data=EmployeeRead.model_validate(employee),
        message="Employee updated successfully",
    )


@router.delete("/{employee_id}", response_model=MessageResponse, summary="Delete employee")
def delete_employee(employee_id: int, db: Session = Depends(get_db)):
    employee_service.delete_employee(db, employee_id)
    return MessageResponse(message="Employee deleted successfully")
