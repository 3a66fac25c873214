"""차단 날짜 레포지토리.

Blocked Date Repository — Dates on which no store accepts new pickups.
"""

from collections.abc import Sequence
from datetime import date

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.calendar import BlockedDate
from app.repositories.base import BaseRepository


class BlockedDateRepository(BaseRepository[BlockedDate]):
    """blocked_dates 테이블 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(BlockedDate)

    async def list_all(
        self,
        db: AsyncSession,
        start: date | None = None,
        end: date | None = None,
    ) -> Sequence[BlockedDate]:
        """차단 날짜 목록, 날짜순 (Blocked dates in date order, optional inclusive range)."""
        query: Select = select(BlockedDate)
        if start is not None:
            query = query.where(BlockedDate.date >= start)
        if end is not None:
            query = query.where(BlockedDate.date <= end)
        result = await db.execute(query.order_by(BlockedDate.date))
        return result.scalars().all()

    async def is_blocked(self, db: AsyncSession, day: date) -> bool:
        return await self.exists(db, {"date": day})

    async def existing_dates(self, db: AsyncSession, days: Sequence[date]) -> set[date]:
        """주어진 날짜 중 이미 차단된 날짜 (Subset of ``days`` already blocked)."""
        if not days:
            return set()
        result = await db.execute(select(BlockedDate.date).where(BlockedDate.date.in_(list(days))))
        return set(result.scalars().all())

    async def create_many(self, db: AsyncSession, days: Sequence[date], reason: str | None) -> list[BlockedDate]:
        """여러 날짜를 한 번에 차단합니다 (Insert one row per day)."""
        rows: list[BlockedDate] = [BlockedDate(date=day, reason=reason) for day in days]
        db.add_all(rows)
        await db.flush()
        return rows

    async def delete_by_date(self, db: AsyncSession, day: date) -> bool:
        """날짜로 차단을 해제합니다 (Unblock a date; False when it was not blocked)."""
        result = await db.execute(delete(BlockedDate).where(BlockedDate.date == day))
        await db.flush()
        return (result.rowcount or 0) > 0


# 싱글턴 인스턴스: Singleton instance
blocked_date_repository: BlockedDateRepository = BlockedDateRepository()
