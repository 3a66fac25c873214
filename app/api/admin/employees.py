"""관리자 직원 라우터 — 직원 CRUD 및 월간 한도 관리 엔드포인트.

Admin Employee Router — Employee CRUD, password reset and the monthly
quota reset action. Admin only.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate, ResetMonthlyResponse
from app.services.employee_service import employee_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    search: Annotated[str | None, Query()] = None,
) -> list[EmployeeResponse]:
    """직원 목록 조회 — 이름/이메일/CPF 검색 (Search by name, e-mail or CPF)."""
    return await employee_service.list_employees(db, search)


@router.post("/reset-monthly", response_model=ResetMonthlyResponse)
async def reset_monthly_limits(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ResetMonthlyResponse:
    """월간 한도 초기화 — 월이 바뀐 직원만 (Reset employees whose month is stale)."""
    result: ResetMonthlyResponse = await employee_service.reset_monthly_limits(db)
    await db.commit()
    return result


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmployeeResponse:
    return await employee_service.get_employee(db, employee_id)


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    data: EmployeeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmployeeResponse:
    """직원 생성 — 기본 비밀번호 계정 포함.

    Create an employee with a login account on the default password.
    """
    result: EmployeeResponse = await employee_service.create_employee(db, data)
    await db.commit()
    return result


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: UUID,
    data: EmployeeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmployeeResponse:
    result: EmployeeResponse = await employee_service.update_employee(db, employee_id, data)
    await db.commit()
    return result


@router.delete("/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> None:
    """직원 삭제 — 예약과 계정도 함께 삭제 (Pickups and account go too)."""
    await employee_service.delete_employee(db, employee_id)
    await db.commit()


@router.post("/{employee_id}/reset-password", response_model=MessageResponse)
async def reset_employee_password(
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> MessageResponse:
    """비밀번호 초기화 — 기본 비밀번호로 (Back to the default password)."""
    await employee_service.reset_password(db, employee_id)
    await db.commit()
    return MessageResponse(message="Senha redefinida para o padrão")
