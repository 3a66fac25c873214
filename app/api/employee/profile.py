"""직원 프로필 라우터 — 본인 레코드와 월간 한도 조회.

Employee Profile Router — Own record with the present month's quota.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_current_employee
from app.models.employee import Employee
from app.schemas.employee import EmployeeResponse
from app.services.employee_service import employee_service

router: APIRouter = APIRouter()


@router.get("", response_model=EmployeeResponse)
async def get_profile(
    employee: Annotated[Employee, Depends(get_current_employee)],
) -> EmployeeResponse:
    return employee_service.to_response(employee)
