"""관리자 차단 날짜 라우터 — 날짜/기간 차단 및 해제.

Admin Blocked Date Router — Block a date or an inclusive range, unblock,
and list.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.calendar import BlockDatesResult, BlockedDateCreate, BlockedDateResponse
from app.services.calendar_service import calendar_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[BlockedDateResponse])
async def list_blocked_dates(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> list[BlockedDateResponse]:
    return await calendar_service.list_blocked_dates(db, start, end)


@router.post("", response_model=BlockDatesResult, status_code=201)
async def block_dates(
    data: BlockedDateCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> BlockDatesResult:
    """날짜 차단 — 기간은 일별로 확장, 이미 차단된 날짜는 건너뜀.

    Block one date or a range; days already blocked are skipped.
    """
    result: BlockDatesResult = await calendar_service.block_dates(db, data)
    await db.commit()
    return result


@router.delete("/{day}", status_code=204)
async def unblock_date(
    day: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> None:
    await calendar_service.unblock_date(db, day)
    await db.commit()
