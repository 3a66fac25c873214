"""차단 날짜 서비스 — 날짜 차단/해제 비즈니스 로직.

Blocked Date Service — Blocking and unblocking pickup dates.
A range request expands into one record per day, inclusive of both ends;
days that are already blocked are skipped rather than duplicated.
"""

from collections.abc import Sequence
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.calendar import BlockedDate
from app.repositories.blocked_date_repository import blocked_date_repository
from app.schemas.calendar import BlockDatesResult, BlockedDateCreate, BlockedDateResponse, DateStatusResponse
from app.utils.dates import expand_date_range
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)

# 한 번에 차단할 수 있는 최대 일수: Longest range accepted by a single block request
MAX_BLOCK_DAYS: int = 366


class CalendarService:
    """차단 날짜 관련 비즈니스 로직을 처리하는 서비스."""

    def to_response(self, blocked: BlockedDate) -> BlockedDateResponse:
        return BlockedDateResponse(
            id=str(blocked.id),
            date=blocked.date,
            reason=blocked.reason,
            created_at=blocked.created_at,
        )

    async def list_blocked_dates(
        self,
        db: AsyncSession,
        start: date | None = None,
        end: date | None = None,
    ) -> list[BlockedDateResponse]:
        rows: Sequence[BlockedDate] = await blocked_date_repository.list_all(db, start, end)
        return [self.to_response(r) for r in rows]

    async def block_dates(self, db: AsyncSession, data: BlockedDateCreate) -> BlockDatesResult:
        """날짜 또는 기간을 차단합니다.

        Block a single date or an inclusive range.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 차단 요청 (Start, optional end, optional reason)

        Returns:
            BlockDatesResult: 생성된 행과 건너뛴 날짜 (Created rows and skipped days)

        Raises:
            BadRequestError: 종료일이 시작일보다 이전, 또는 기간 초과
                (End before start, or range longer than MAX_BLOCK_DAYS)
        """
        end: date = data.end_date or data.start_date
        if (end - data.start_date).days + 1 > MAX_BLOCK_DAYS:
            raise BadRequestError(f"Período máximo de {MAX_BLOCK_DAYS} dias")
        try:
            days: list[date] = expand_date_range(data.start_date, end)
        except ValueError:
            raise BadRequestError("A data final deve ser posterior à data inicial")

        reason: str | None = data.reason.strip() if data.reason and data.reason.strip() else None
        existing: set[date] = await blocked_date_repository.existing_dates(db, days)
        new_days: list[date] = [d for d in days if d not in existing]
        created: list[BlockedDate] = await blocked_date_repository.create_many(db, new_days, reason)

        logger.info("Blocked %d date(s) from %s to %s", len(created), days[0], days[-1])
        return BlockDatesResult(
            created=[self.to_response(b) for b in created],
            skipped=sorted(existing),
        )

    async def unblock_date(self, db: AsyncSession, day: date) -> None:
        """날짜 차단을 해제합니다 (Raises NotFoundError when the date is not blocked)."""
        if not await blocked_date_repository.delete_by_date(db, day):
            raise NotFoundError("Data não está bloqueada")
        logger.info("Unblocked %s", day)

    async def get_date_status(self, db: AsyncSession, day: date) -> DateStatusResponse:
        rows: Sequence[BlockedDate] = await blocked_date_repository.list_all(db, day, day)
        if not rows:
            return DateStatusResponse(date=day, is_blocked=False)
        return DateStatusResponse(date=day, is_blocked=True, reason=rows[0].reason)


# 싱글턴 인스턴스: Singleton instance
calendar_service: CalendarService = CalendarService()
