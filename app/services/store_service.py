"""매장 서비스 — 매장 CRUD 및 일자별 수용량 비즈니스 로직.

Store Service — Store CRUD plus per-date capacity administration and
availability lookups.
"""

from collections.abc import Sequence
from datetime import date, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.pickup import PickupSchedule, STATUS_SCHEDULED
from app.models.store import Store, StoreCapacity
from app.models.user import ROLE_STORE, User
from app.repositories.blocked_date_repository import blocked_date_repository
from app.repositories.employee_repository import employee_repository
from app.repositories.pickup_repository import pickup_repository
from app.repositories.store_capacity_repository import store_capacity_repository
from app.repositories.store_repository import store_repository
from app.schemas.store import CapacityResponse, StoreCreate, StoreResponse, StoreUpdate
from app.services.user_service import user_service
from app.utils.capacity import available_capacity, booked_count, effective_capacity
from app.utils.dates import expand_date_range
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.logger import get_logger
from app.utils.quota import current_month

logger = get_logger(__name__)

# 수용량 달력 조회 최대 일수: Longest range served by the capacity calendar
MAX_CALENDAR_DAYS: int = 92


class StoreService:
    """매장 관련 비즈니스 로직을 처리하는 서비스.

    Service handling store business logic.
    """

    def to_response(self, store: Store) -> StoreResponse:
        return StoreResponse(
            id=str(store.id),
            user_id=str(store.user_id) if store.user_id else None,
            name=store.name,
            address=store.address,
            max_daily_capacity=store.max_daily_capacity,
            created_at=store.created_at,
        )

    def capacity_response(
        self,
        store: Store,
        day: date,
        row: StoreCapacity | None,
        is_blocked: bool = False,
    ) -> CapacityResponse:
        """매장+날짜 수용량 응답을 만듭니다 (Capacity view of one store/date)."""
        return CapacityResponse(
            store_id=str(store.id),
            date=day,
            max_capacity=row.max_capacity if row is not None else None,
            effective_capacity=effective_capacity(store.max_daily_capacity, row),
            used_capacity=booked_count(row),
            available_capacity=available_capacity(store.max_daily_capacity, row),
            is_blocked=is_blocked,
        )

    async def get_or_404(self, db: AsyncSession, store_id: UUID) -> Store:
        store: Store | None = await store_repository.get_by_id(db, store_id)
        if store is None:
            raise NotFoundError("Loja não encontrada")
        return store

    async def get_for_user(self, db: AsyncSession, user: User) -> Store:
        """로그인 사용자의 매장 (Store linked to the logged-in user)."""
        store: Store | None = await store_repository.get_by_user_id(db, user.id)
        if store is None:
            raise NotFoundError("Loja não encontrada")
        return store

    async def list_stores(self, db: AsyncSession) -> list[StoreResponse]:
        stores: Sequence[Store] = await store_repository.list_all(db)
        return [self.to_response(s) for s in stores]

    async def get_store(self, db: AsyncSession, store_id: UUID) -> StoreResponse:
        return self.to_response(await self.get_or_404(db, store_id))

    async def create_store(self, db: AsyncSession, data: StoreCreate) -> StoreResponse:
        """새 매장을 생성합니다.

        Create a store, and its login account when credentials are given.

        Raises:
            DuplicateError: 로그인 이메일 중복 (Login e-mail already registered)
        """
        user_id: UUID | None = None
        if data.login_email and data.login_password:
            user: User = await user_service.create_account(
                db,
                email=data.login_email,
                full_name=data.name,
                role=ROLE_STORE,
                password=data.login_password,
            )
            user_id = user.id

        store: Store = await store_repository.create(db, {
            "user_id": user_id,
            "name": data.name,
            "address": data.address,
            "max_daily_capacity": (
                data.max_daily_capacity if data.max_daily_capacity is not None else settings.DEFAULT_STORE_CAPACITY
            ),
        })
        logger.info("Created store %s", store.id)
        return self.to_response(store)

    async def update_store(self, db: AsyncSession, store_id: UUID, data: StoreUpdate) -> StoreResponse:
        """매장 정보를 수정합니다 (기본 수용량 포함, default capacity included)."""
        store: Store = await self.get_or_404(db, store_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        updated: Store | None = await store_repository.update(db, store.id, update_data)
        if store.user_id and "name" in update_data:
            await user_service.update_account(db, store.user_id, full_name=update_data["name"])
        return self.to_response(updated or store)

    async def delete_store(self, db: AsyncSession, store_id: UUID) -> None:
        """매장, 예약, 수용량 행, 로그인 계정을 삭제합니다.

        Delete a store with its pickups, capacity rows and login account.
        Quota held by still-scheduled pickups is given back to the employees
        first.
        """
        store: Store = await self.get_or_404(db, store_id)
        scheduled: Sequence[PickupSchedule] = await pickup_repository.list_filtered(
            db, store_id=store.id, status=STATUS_SCHEDULED
        )
        month: str = current_month()
        for pickup in scheduled:
            await employee_repository.restore_quota(db, pickup.employee, pickup.quantity, month)

        user_id: UUID | None = store.user_id
        await store_repository.delete_with_children(db, store)
        if user_id is not None:
            await user_service.delete_account(db, user_id)
        logger.info("Deleted store %s", store_id)

    async def reset_password(self, db: AsyncSession, store_id: UUID) -> None:
        store: Store = await self.get_or_404(db, store_id)
        if store.user_id is None:
            raise BadRequestError("Loja sem usuário de acesso")
        await user_service.reset_password(db, store.user_id)

    # --- 수용량 (Capacity) ---

    async def get_date_capacity(self, db: AsyncSession, store_id: UUID, day: date) -> CapacityResponse:
        """매장+날짜의 남은 수용량 (Availability of one store on one date)."""
        store: Store = await self.get_or_404(db, store_id)
        row: StoreCapacity | None = await store_capacity_repository.get_for_date(db, store.id, day)
        blocked: bool = await blocked_date_repository.is_blocked(db, day)
        return self.capacity_response(store, day, row, blocked)

    async def list_capacities(
        self,
        db: AsyncSession,
        store_id: UUID,
        start: date,
        end: date | None = None,
    ) -> list[CapacityResponse]:
        """기간 내 일별 수용량 달력.

        Day-by-day capacity calendar for a store over an inclusive range;
        days without a row report the store default with zero bookings.

        Raises:
            BadRequestError: 잘못된 기간 (End before start, or range too long)
        """
        end = end or start + timedelta(days=30)
        try:
            days: list[date] = expand_date_range(start, end)
        except ValueError:
            raise BadRequestError("A data final deve ser posterior à data inicial")
        if len(days) > MAX_CALENDAR_DAYS:
            raise BadRequestError(f"Período máximo de {MAX_CALENDAR_DAYS} dias")

        store: Store = await self.get_or_404(db, store_id)
        rows: dict[date, StoreCapacity] = {
            row.date: row for row in await store_capacity_repository.list_for_range(db, store.id, start, end)
        }
        blocked: set[date] = {b.date for b in await blocked_date_repository.list_all(db, start, end)}
        return [self.capacity_response(store, day, rows.get(day), day in blocked) for day in days]

    async def set_date_capacity(
        self,
        db: AsyncSession,
        store_id: UUID,
        day: date,
        max_capacity: int | None,
    ) -> CapacityResponse:
        """날짜별 수용량을 재정의하거나 해제합니다 (None clears the override)."""
        store: Store = await self.get_or_404(db, store_id)
        row: StoreCapacity = await store_capacity_repository.set_override(db, store.id, day, max_capacity)
        logger.info("Capacity override for store %s on %s set to %s", store.id, day, max_capacity)
        return self.capacity_response(store, day, row, await blocked_date_repository.is_blocked(db, day))


# 싱글턴 인스턴스: Singleton instance
store_service: StoreService = StoreService()
