from fastapi import APIRouter

from employee_records.api.routes.auth import router as auth_router
from employee_records.api.routes.employees import router as employees_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(employees_router, prefix="/employees", tags=["employees"])
