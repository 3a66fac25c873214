"""수령 예약 레포지토리 — 예약 조회, 필터링, 통계 쿼리.

Pickup Repository — Pickup schedule lookups, filtered listings and stats.
"""

from collections.abc import Sequence
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.pickup import PickupSchedule, STATUS_COMPLETED
from app.repositories.base import BaseRepository


class PickupRepository(BaseRepository[PickupSchedule]):
    """pickup_schedules 테이블 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the pickup_schedules table.
    Employee and store relationships are eagerly loaded by the model.
    """

    def __init__(self) -> None:
        super().__init__(PickupSchedule)

    async def get_by_token(
        self,
        db: AsyncSession,
        token: str,
        store_id: UUID | None = None,
    ) -> PickupSchedule | None:
        """토큰으로 예약을 조회합니다.

        Retrieve a pickup by its token, optionally restricted to one store.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            token: 수령 토큰 (Pickup token)
            store_id: 매장 범위 필터 (Store scope filter)

        Returns:
            PickupSchedule | None: 조회된 예약 또는 None
        """
        query: Select = select(PickupSchedule).where(PickupSchedule.token == token)
        if store_id is not None:
            query = query.where(PickupSchedule.store_id == store_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def token_exists(self, db: AsyncSession, token: str) -> bool:
        return await self.exists(db, {"token": token})

    def build_query(
        self,
        employee_id: UUID | None = None,
        store_id: UUID | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Select:
        """필터가 적용된 예약 조회 쿼리를 만듭니다.

        Build the listing query: newest scheduled date first, then newest created.
        """
        query: Select = select(PickupSchedule)
        if employee_id is not None:
            query = query.where(PickupSchedule.employee_id == employee_id)
        if store_id is not None:
            query = query.where(PickupSchedule.store_id == store_id)
        if status is not None:
            query = query.where(PickupSchedule.status == status)
        if date_from is not None:
            query = query.where(PickupSchedule.scheduled_date >= date_from)
        if date_to is not None:
            query = query.where(PickupSchedule.scheduled_date <= date_to)
        return query.order_by(PickupSchedule.scheduled_date.desc(), PickupSchedule.created_at.desc())

    async def list_filtered(self, db: AsyncSession, **filters: Any) -> Sequence[PickupSchedule]:
        """필터 조건의 예약 목록 (All pickups matching ``build_query`` filters)."""
        result = await db.execute(self.build_query(**filters))
        return result.scalars().all()

    async def count_by_status(
        self,
        db: AsyncSession,
        store_id: UUID | None = None,
        day: date | None = None,
    ) -> dict[str, int]:
        """상태별 예약 수 (Pickup count per status, optionally for one store/date)."""
        query: Select = select(PickupSchedule.status, func.count()).group_by(PickupSchedule.status)
        if store_id is not None:
            query = query.where(PickupSchedule.store_id == store_id)
        if day is not None:
            query = query.where(PickupSchedule.scheduled_date == day)
        result = await db.execute(query)
        return {status: count for status, count in result.all()}

    async def completed_quantity(self, db: AsyncSession) -> int:
        """수령 완료된 총 수량 (Sum of quantity over completed pickups)."""
        query: Select = select(func.coalesce(func.sum(PickupSchedule.quantity), 0)).where(
            PickupSchedule.status == STATUS_COMPLETED
        )
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스: Singleton instance
pickup_repository: PickupRepository = PickupRepository()
