"""직원 수령 예약 라우터 — 예약 생성 및 본인 예약 조회.

Employee Pickup Router — Schedule a pickup and list one's own pickups.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_employee, require_employee
from app.database import get_db
from app.models.employee import Employee
from app.models.user import User
from app.schemas.pickup import PickupCreate, PickupResponse, PickupStatus
from app.schemas.store import CapacityResponse, StoreResponse
from app.services.pickup_service import pickup_service
from app.services.store_service import store_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[PickupResponse])
async def list_my_pickups(
    db: Annotated[AsyncSession, Depends(get_db)],
    employee: Annotated[Employee, Depends(get_current_employee)],
    status: Annotated[PickupStatus | None, Query()] = None,
) -> list[PickupResponse]:
    return await pickup_service.list_for_employee(db, employee, status)


@router.post("", response_model=PickupResponse, status_code=201)
async def schedule_pickup(
    data: PickupCreate,
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db)],
    employee: Annotated[Employee, Depends(get_current_employee)],
) -> PickupResponse:
    """수령 예약 — 한도/차단 날짜/수용량 검사 후 토큰 발급.

    Schedule a pickup. Quota, blocked date and capacity are checked before
    anything is written; the store is notified after commit.
    """
    result: PickupResponse = await pickup_service.schedule_pickup(db, employee, data, background_tasks)
    await db.commit()
    return result


@router.get("/stores", response_model=list[StoreResponse])
async def list_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_employee)],
) -> list[StoreResponse]:
    """예약 가능한 매장 목록 (Stores available for booking)."""
    return await store_service.list_stores(db)


@router.get("/stores/{store_id}/availability/{day}", response_model=CapacityResponse)
async def get_availability(
    store_id: UUID,
    day: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_employee)],
) -> CapacityResponse:
    """매장+날짜 남은 수용량 (Remaining capacity for one store and date)."""
    return await store_service.get_date_capacity(db, store_id, day)
