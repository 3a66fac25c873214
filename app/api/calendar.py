"""달력 라우터 — 모든 역할이 조회하는 차단 날짜.

Calendar Router — Blocked dates readable by every role, so date pickers can
disable them.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.calendar import BlockedDateResponse, DateStatusResponse
from app.services.calendar_service import calendar_service

router: APIRouter = APIRouter()


@router.get("/blocked-dates", response_model=list[BlockedDateResponse])
async def list_blocked_dates(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> list[BlockedDateResponse]:
    return await calendar_service.list_blocked_dates(db, start, end)


@router.get("/dates/{day}", response_model=DateStatusResponse)
async def get_date_status(
    day: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DateStatusResponse:
    """날짜 차단 여부 조회 (Whether one date is blocked)."""
    return await calendar_service.get_date_status(db, day)
