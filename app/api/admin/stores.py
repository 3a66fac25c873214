"""관리자 매장 라우터 — 매장 CRUD 및 일자별 수용량 엔드포인트.

Admin Store Router — Store CRUD, login password reset and per-date capacity
overrides. Admin only.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.store import CapacityOverrideRequest, CapacityResponse, StoreCreate, StoreResponse, StoreUpdate
from app.services.store_service import store_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[StoreResponse])
async def list_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[StoreResponse]:
    return await store_service.list_stores(db)


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> StoreResponse:
    return await store_service.get_store(db, store_id)


@router.post("", response_model=StoreResponse, status_code=201)
async def create_store(
    data: StoreCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> StoreResponse:
    """매장 생성 — 로그인 정보가 있으면 매장 계정도 생성.

    Create a store, plus its login account when credentials are given.
    """
    result: StoreResponse = await store_service.create_store(db, data)
    await db.commit()
    return result


@router.put("/{store_id}", response_model=StoreResponse)
async def update_store(
    store_id: UUID,
    data: StoreUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> StoreResponse:
    """매장 수정 — 기본 일일 수용량 포함 (Default daily capacity included)."""
    result: StoreResponse = await store_service.update_store(db, store_id, data)
    await db.commit()
    return result


@router.delete("/{store_id}", status_code=204)
async def delete_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> None:
    await store_service.delete_store(db, store_id)
    await db.commit()


@router.post("/{store_id}/reset-password", response_model=MessageResponse)
async def reset_store_password(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> MessageResponse:
    await store_service.reset_password(db, store_id)
    await db.commit()
    return MessageResponse(message="Senha redefinida para o padrão")


# --- 일자별 수용량 (Per-date capacity) ---


@router.get("/{store_id}/capacities", response_model=list[CapacityResponse])
async def list_capacities(
    store_id: UUID,
    start: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    end: Annotated[date | None, Query()] = None,
) -> list[CapacityResponse]:
    """수용량 달력 — start 부터 end 까지 일별 (Day-by-day capacity calendar)."""
    return await store_service.list_capacities(db, store_id, start, end)


@router.get("/{store_id}/capacities/{day}", response_model=CapacityResponse)
async def get_date_capacity(
    store_id: UUID,
    day: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CapacityResponse:
    return await store_service.get_date_capacity(db, store_id, day)


@router.put("/{store_id}/capacities/{day}", response_model=CapacityResponse)
async def set_date_capacity(
    store_id: UUID,
    day: date,
    data: CapacityOverrideRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CapacityResponse:
    """날짜별 수용량 재정의 설정 (Set the capacity override for one date)."""
    result: CapacityResponse = await store_service.set_date_capacity(db, store_id, day, data.max_capacity)
    await db.commit()
    return result


@router.delete("/{store_id}/capacities/{day}", response_model=CapacityResponse)
async def clear_date_capacity(
    store_id: UUID,
    day: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CapacityResponse:
    """날짜별 재정의 해제 — 매장 기본값으로 (Fall back to the store default)."""
    result: CapacityResponse = await store_service.set_date_capacity(db, store_id, day, None)
    await db.commit()
    return result
