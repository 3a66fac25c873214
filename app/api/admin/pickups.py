"""관리자 수령 예약 라우터 — 전체 예약 조회.

Admin Pickup Router — Paginated listing of every pickup with filters.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.common import PaginatedResponse
from app.schemas.pickup import PickupStatus
from app.services.pickup_service import pickup_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_pickups(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    store_id: Annotated[UUID | None, Query()] = None,
    employee_id: Annotated[UUID | None, Query()] = None,
    status: Annotated[PickupStatus | None, Query()] = None,
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """전체 예약 목록 — 매장/직원/상태/기간 필터 (Filter by store, employee, status, dates)."""
    return await pickup_service.list_all(
        db,
        store_id=store_id,
        employee_id=employee_id,
        status=status,
        date_from=date_from,
        date_to=date_to,
        page=page,
        per_page=per_page,
    )
