"""수령 예약 서비스 — 예약, 확인, 취소 및 조회 비즈니스 로직.

Pickup Service — Scheduling, confirmation, cancellation and listings.

Status Flow:
    scheduled → completed   (매장이 토큰으로 확인, store confirms by token)
    scheduled → cancelled   (매장이 사유와 함께 취소, store cancels with a reason)

Every transition writes all of its rows in the request transaction; the
router commits only after the service returns, so a failure at any step
leaves quota and capacity untouched. Notifications are queued on
BackgroundTasks and run after the commit.
"""

from collections.abc import Sequence
from datetime import date, datetime, timezone
from uuid import UUID

from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.employee import Employee
from app.models.pickup import (
    CONFIRMABLE_STATUSES,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_PENDING,
    STATUS_SCHEDULED,
    PickupSchedule,
)
from app.models.store import Store, StoreCapacity
from app.repositories.blocked_date_repository import blocked_date_repository
from app.repositories.employee_repository import employee_repository
from app.repositories.pickup_repository import pickup_repository
from app.repositories.store_capacity_repository import store_capacity_repository
from app.repositories.store_repository import store_repository
from app.schemas.common import PaginatedResponse
from app.schemas.pickup import PickupCreate, PickupResponse, StoreDaySummary
from app.services.notification_service import notification_service
from app.utils.capacity import available_capacity, booked_count, effective_capacity
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.logger import get_logger
from app.utils.quota import current_month, exceeds_quota, remaining_quota, today
from app.utils.tokens import generate_pickup_token, normalize_token

logger = get_logger(__name__)

# 토큰 충돌 시 재생성 횟수: Attempts before giving up on a unique token
TOKEN_ATTEMPTS: int = 5

PICKUP_NOT_FOUND: str = "Agendamento não encontrado para este token"


class PickupService:
    """수령 예약 관련 비즈니스 로직을 처리하는 서비스."""

    def to_response(self, pickup: PickupSchedule) -> PickupResponse:
        return PickupResponse(
            id=str(pickup.id),
            employee_id=str(pickup.employee_id),
            employee_name=pickup.employee.name if pickup.employee else "",
            store_id=str(pickup.store_id),
            store_name=pickup.store.name if pickup.store else "",
            scheduled_date=pickup.scheduled_date,
            quantity=pickup.quantity,
            observations=pickup.observations,
            token=pickup.token,
            status=pickup.status,
            created_at=pickup.created_at,
            completed_at=pickup.completed_at,
            cancelled_at=pickup.cancelled_at,
            cancellation_reason=pickup.cancellation_reason,
        )

    async def _unique_token(self, db: AsyncSession) -> str:
        for _ in range(TOKEN_ATTEMPTS):
            token: str = generate_pickup_token()
            if not await pickup_repository.token_exists(db, token):
                return token
        raise BadRequestError("Não foi possível gerar um token único, tente novamente")

    async def schedule_pickup(
        self,
        db: AsyncSession,
        employee: Employee,
        data: PickupCreate,
        background_tasks: BackgroundTasks | None = None,
    ) -> PickupResponse:
        """직원의 수령을 예약합니다.

        Schedule a pickup for ``employee``. All checks run before any write:
        quota, blocked date, then capacity. The writes themselves are guarded
        by conditional updates, so a concurrent booking that takes the last
        slot or the last unit of quota still makes this one fail.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            employee: 예약하는 직원 (Booking employee)
            data: 예약 요청 (Store, date, quantity, observations)
            background_tasks: 매장 알림 큐 (Queue for the store notification)

        Returns:
            PickupResponse: 생성된 예약 (Created pickup with its token)

        Raises:
            NotFoundError: 매장 없음 (Unknown store)
            BadRequestError: 과거 날짜, 한도 초과, 차단 날짜, 수용량 소진
                             (Past date, quota exceeded, blocked date, no capacity)
        """
        try:
            store_id: UUID = UUID(data.store_id)
        except ValueError:
            raise NotFoundError("Loja não encontrada")
        store: Store | None = await store_repository.get_by_id(db, store_id)
        if store is None:
            raise NotFoundError("Loja não encontrada")

        if data.scheduled_date < today():
            raise BadRequestError("Não é possível agendar para uma data passada")

        month: str = current_month()
        if exceeds_quota(employee.monthly_limit, employee.current_month_pickups, employee.last_reset_month, data.quantity, month):
            remaining: int = remaining_quota(
                employee.monthly_limit, employee.current_month_pickups, employee.last_reset_month, month
            )
            raise BadRequestError(f"Limite mensal excedido. Você pode retirar mais {remaining} unidade(s) este mês")

        if await blocked_date_repository.is_blocked(db, data.scheduled_date):
            raise BadRequestError("Esta data está bloqueada para agendamentos")

        row: StoreCapacity | None = await store_capacity_repository.get_for_date(db, store.id, data.scheduled_date)
        if available_capacity(store.max_daily_capacity, row) < 1:
            raise BadRequestError("Não há vagas disponíveis nesta loja para esta data")

        token: str = await self._unique_token(db)

        # 조건부 증가: 동시 예약이 먼저 소진했으면 실패 (fails if a concurrent booking won)
        if not await employee_repository.consume_quota(db, employee, data.quantity, month):
            raise BadRequestError("Limite mensal excedido")
        try:
            reserved: bool = await store_capacity_repository.reserve_slot(db, store, data.scheduled_date)
        except IntegrityError as exc:
            raise BadRequestError("A capacidade desta data foi alterada, tente novamente") from exc
        if not reserved:
            raise BadRequestError("Não há vagas disponíveis nesta loja para esta data")

        pickup: PickupSchedule = await pickup_repository.create(db, {
            "employee_id": employee.id,
            "store_id": store.id,
            "scheduled_date": data.scheduled_date,
            "quantity": data.quantity,
            "observations": data.observations.strip() if data.observations else None,
            "token": token,
            "status": STATUS_SCHEDULED,
        })
        logger.info(
            "Pickup %s scheduled: employee=%s store=%s date=%s qty=%d",
            pickup.id, employee.id, store.id, data.scheduled_date, data.quantity,
        )

        if background_tasks is not None:
            background_tasks.add_task(
                notification_service.notify_store_pickup,
                store.id, token, data.scheduled_date, data.quantity, employee.name,
            )
        return self.to_response(pickup)

    async def confirm_pickup(
        self,
        db: AsyncSession,
        store: Store,
        token: str,
        background_tasks: BackgroundTasks | None = None,
    ) -> PickupResponse:
        """토큰으로 수령을 확인합니다.

        Confirm a pickup at ``store`` by token. Quota and capacity were
        consumed at scheduling time and are left as they are.

        Raises:
            NotFoundError: 매장에 해당 토큰 없음 (Token unknown at this store)
            BadRequestError: 이미 완료/취소됨 (Already completed or cancelled)
        """
        pickup: PickupSchedule | None = await pickup_repository.get_by_token(db, normalize_token(token), store_id=store.id)
        if pickup is None:
            raise NotFoundError(PICKUP_NOT_FOUND)
        if pickup.status not in CONFIRMABLE_STATUSES:
            raise BadRequestError(self._terminal_message(pickup))

        pickup.status = STATUS_COMPLETED
        pickup.completed_at = datetime.now(timezone.utc)
        await db.flush()
        logger.info("Pickup %s confirmed at store %s", pickup.id, store.id)

        if background_tasks is not None:
            background_tasks.add_task(
                notification_service.notify_employee_pickup,
                pickup.employee_id, STATUS_COMPLETED, pickup.token, store.name, pickup.scheduled_date,
            )
        return self.to_response(pickup)

    async def cancel_pickup(
        self,
        db: AsyncSession,
        store: Store,
        token: str,
        reason: str,
        background_tasks: BackgroundTasks | None = None,
    ) -> PickupResponse:
        """토큰으로 예약을 취소합니다.

        Cancel a scheduled pickup at ``store``. Releases exactly one capacity
        slot and restores exactly the booked quantity to the employee quota.

        Raises:
            BadRequestError: 사유 누락 또는 예약 상태 아님 (Missing reason or not scheduled)
            NotFoundError: 매장에 해당 토큰 없음 (Token unknown at this store)
        """
        reason = reason.strip()
        if not reason:
            raise BadRequestError("Informe o motivo do cancelamento")

        pickup: PickupSchedule | None = await pickup_repository.get_by_token(db, normalize_token(token), store_id=store.id)
        if pickup is None:
            raise NotFoundError(PICKUP_NOT_FOUND)
        if pickup.status != STATUS_SCHEDULED:
            raise BadRequestError(self._terminal_message(pickup))

        pickup.status = STATUS_CANCELLED
        pickup.cancelled_at = datetime.now(timezone.utc)
        pickup.cancellation_reason = reason

        await store_capacity_repository.adjust(db, store, pickup.scheduled_date, -1)
        employee: Employee | None = await employee_repository.get_by_id(db, pickup.employee_id)
        if employee is not None:
            await employee_repository.restore_quota(db, employee, pickup.quantity, current_month())
        await db.flush()
        logger.info("Pickup %s cancelled at store %s", pickup.id, store.id)

        if background_tasks is not None:
            background_tasks.add_task(
                notification_service.notify_employee_pickup,
                pickup.employee_id, STATUS_CANCELLED, pickup.token, store.name, pickup.scheduled_date, reason,
            )
        return self.to_response(pickup)

    def _terminal_message(self, pickup: PickupSchedule) -> str:
        if pickup.status == STATUS_COMPLETED:
            return "Este agendamento já foi retirado"
        if pickup.status == STATUS_CANCELLED:
            return "Este agendamento já foi cancelado"
        return "Este agendamento não pode ser alterado"

    # --- 조회 (Listings) ---

    async def get_by_token_for_store(self, db: AsyncSession, store: Store, token: str) -> PickupResponse:
        """매장에서 토큰으로 예약 조회 (Look up a pickup by token at the caller's store)."""
        pickup: PickupSchedule | None = await pickup_repository.get_by_token(db, normalize_token(token), store_id=store.id)
        if pickup is None:
            raise NotFoundError(PICKUP_NOT_FOUND)
        return self.to_response(pickup)

    async def list_for_employee(self, db: AsyncSession, employee: Employee, status: str | None = None) -> list[PickupResponse]:
        pickups: Sequence[PickupSchedule] = await pickup_repository.list_filtered(
            db, employee_id=employee.id, status=status
        )
        return [self.to_response(p) for p in pickups]

    async def list_for_store(
        self,
        db: AsyncSession,
        store: Store,
        day: date | None = None,
        status: str | None = None,
    ) -> list[PickupResponse]:
        pickups: Sequence[PickupSchedule] = await pickup_repository.list_filtered(
            db, store_id=store.id, status=status, date_from=day, date_to=day
        )
        return [self.to_response(p) for p in pickups]

    async def list_all(
        self,
        db: AsyncSession,
        store_id: UUID | None = None,
        employee_id: UUID | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> PaginatedResponse:
        """관리자용 전체 예약 목록, 페이지네이션 (Admin listing with filters, paginated)."""
        query = pickup_repository.build_query(
            employee_id=employee_id,
            store_id=store_id,
            status=status,
            date_from=date_from,
            date_to=date_to,
        )
        items, total = await pickup_repository.get_paginated(db, query, page, per_page)
        return PaginatedResponse(
            items=[self.to_response(p) for p in items],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def day_summary(self, db: AsyncSession, store: Store, day: date) -> StoreDaySummary:
        """매장 일별 요약 (Counts per status plus capacity for one day)."""
        counts: dict[str, int] = await pickup_repository.count_by_status(db, store_id=store.id, day=day)
        row: StoreCapacity | None = await store_capacity_repository.get_for_date(db, store.id, day)
        return StoreDaySummary(
            date=day,
            scheduled=counts.get(STATUS_SCHEDULED, 0) + counts.get(STATUS_PENDING, 0),
            completed=counts.get(STATUS_COMPLETED, 0),
            cancelled=counts.get(STATUS_CANCELLED, 0),
            effective_capacity=effective_capacity(store.max_daily_capacity, row),
            used_capacity=booked_count(row),
            available_capacity=available_capacity(store.max_daily_capacity, row),
            is_blocked=await blocked_date_repository.is_blocked(db, day),
        )


# 싱글턴 인스턴스: Singleton instance
pickup_service: PickupService = PickupService()
