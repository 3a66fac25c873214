"""매장 수령 라우터 — 토큰 확인, 수령 완료, 취소, 매장 예약 조회.

Store Pickup Router — Token lookup, confirmation, cancellation and the
store's own pickup list. Store role only; every lookup is scoped to the
caller's store.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_store
from app.database import get_db
from app.models.store import Store
from app.schemas.pickup import PickupCancelRequest, PickupConfirmRequest, PickupResponse, PickupStatus
from app.services.pickup_service import pickup_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[PickupResponse])
async def list_store_pickups(
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[Store, Depends(get_current_store)],
    day: Annotated[date | None, Query(alias="date")] = None,
    status: Annotated[PickupStatus | None, Query()] = None,
) -> list[PickupResponse]:
    """매장 예약 목록 — 날짜/상태 필터 (Filter by date and status)."""
    return await pickup_service.list_for_store(db, store, day, status)


@router.get("/token/{token}", response_model=PickupResponse)
async def get_pickup_by_token(
    token: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[Store, Depends(get_current_store)],
) -> PickupResponse:
    """토큰 조회 — 확인 전 예약 내용 표시 (Show the booking before confirming)."""
    return await pickup_service.get_by_token_for_store(db, store, token)


@router.post("/confirm", response_model=PickupResponse)
async def confirm_pickup(
    data: PickupConfirmRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[Store, Depends(get_current_store)],
) -> PickupResponse:
    """수령 완료 처리 — 직원에게 알림 (Employee is notified after commit)."""
    result: PickupResponse = await pickup_service.confirm_pickup(db, store, data.token, background_tasks)
    await db.commit()
    return result


@router.post("/cancel", response_model=PickupResponse)
async def cancel_pickup(
    data: PickupCancelRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[Store, Depends(get_current_store)],
) -> PickupResponse:
    """예약 취소 — 사유 필수, 수용량과 한도 복원.

    Cancel with a reason; the slot and the quota are given back.
    """
    result: PickupResponse = await pickup_service.cancel_pickup(db, store, data.token, data.reason, background_tasks)
    await db.commit()
    return result
