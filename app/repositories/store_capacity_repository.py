"""매장 일자별 수용량 레포지토리.

Store Capacity Repository — Per (store, date) booking counters and overrides.
Rows are created lazily: on the first booking for a date, or on the first
admin override. Booking a slot is a conditional UPDATE bounded by the
effective capacity so concurrent bookings cannot overshoot it.
"""

from collections.abc import Sequence
from datetime import date
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.store import Store, StoreCapacity
from app.repositories.base import BaseRepository
from app.utils.capacity import CapacitySnapshot, adjust_capacity, available_capacity


class StoreCapacityRepository(BaseRepository[StoreCapacity]):
    """store_capacities 테이블 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the store_capacities table.
    """

    def __init__(self) -> None:
        super().__init__(StoreCapacity)

    async def get_for_date(self, db: AsyncSession, store_id: UUID, day: date) -> StoreCapacity | None:
        """매장+날짜 행을 조회합니다 (Row for one store and date, or None)."""
        query: Select = select(StoreCapacity).where(
            StoreCapacity.store_id == store_id,
            StoreCapacity.date == day,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_range(
        self,
        db: AsyncSession,
        store_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> Sequence[StoreCapacity]:
        """기간 내 행 목록 (Rows of a store within an optional inclusive date range)."""
        query: Select = select(StoreCapacity).where(StoreCapacity.store_id == store_id)
        if start is not None:
            query = query.where(StoreCapacity.date >= start)
        if end is not None:
            query = query.where(StoreCapacity.date <= end)
        result = await db.execute(query.order_by(StoreCapacity.date))
        return result.scalars().all()

    async def reserve_slot(self, db: AsyncSession, store: Store, day: date) -> bool:
        """남은 수용량이 있을 때만 예약 건수를 1 증가시킵니다.

        Book one slot for (store, day) if capacity remains.

        An existing row is incremented with a single conditional UPDATE whose
        WHERE clause compares against COALESCE(max_capacity, store default).
        A missing row is inserted pinned to the store default with one booking;
        a concurrent insert of the same row fails on the unique constraint.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            store: 대상 매장 (Target store)
            day: 예약 날짜 (Booking date)

        Returns:
            bool: 예약 성공 여부, False면 수용량 소진 (False when capacity is exhausted)
        """
        row: StoreCapacity | None = await self.get_for_date(db, store.id, day)
        if row is None:
            if available_capacity(store.max_daily_capacity, None) < 1:
                return False
            snapshot: CapacitySnapshot = adjust_capacity(store.id, day, store.max_daily_capacity, None, 1)
            db.add(StoreCapacity(
                store_id=snapshot.store_id,
                date=snapshot.date,
                max_capacity=snapshot.max_capacity,
                used_capacity=snapshot.used_capacity,
            ))
            await db.flush()
            return True

        stmt = (
            update(StoreCapacity)
            .where(
                StoreCapacity.id == row.id,
                StoreCapacity.used_capacity < func.coalesce(StoreCapacity.max_capacity, store.max_daily_capacity),
            )
            .values(used_capacity=StoreCapacity.used_capacity + 1)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        await db.refresh(row)
        return result.rowcount == 1

    async def adjust(self, db: AsyncSession, store: Store, day: date, delta: int) -> StoreCapacity:
        """예약 건수를 delta 만큼 조정합니다 (0 미만 불가).

        Apply ``delta`` to the booked count, creating the row when missing.
        Used to release a slot on cancellation (``delta = -1``).
        """
        row: StoreCapacity | None = await self.get_for_date(db, store.id, day)
        snapshot: CapacitySnapshot = adjust_capacity(store.id, day, store.max_daily_capacity, row, delta)
        if row is None:
            row = StoreCapacity(
                store_id=snapshot.store_id,
                date=snapshot.date,
                max_capacity=snapshot.max_capacity,
                used_capacity=snapshot.used_capacity,
            )
            db.add(row)
        else:
            row.used_capacity = snapshot.used_capacity
        await db.flush()
        return row

    async def set_override(self, db: AsyncSession, store_id: UUID, day: date, max_capacity: int | None) -> StoreCapacity:
        """날짜별 수용량 재정의를 설정하거나 해제합니다.

        Set (or clear with None) the capacity override for a date. A missing
        row is created with zero bookings.
        """
        row: StoreCapacity | None = await self.get_for_date(db, store_id, day)
        if row is None:
            row = StoreCapacity(store_id=store_id, date=day, max_capacity=max_capacity, used_capacity=0)
            db.add(row)
        else:
            row.max_capacity = max_capacity
        await db.flush()
        await db.refresh(row)
        return row


# 싱글턴 인스턴스: Singleton instance
store_capacity_repository: StoreCapacityRepository = StoreCapacityRepository()
