"""매장 대시보드 라우터 — 일별 요약.

Store Dashboard Router — Daily summary for the caller's store.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_store
from app.database import get_db
from app.models.store import Store
from app.schemas.pickup import StoreDaySummary
from app.services.dashboard_service import dashboard_service

router: APIRouter = APIRouter()


@router.get("/summary", response_model=StoreDaySummary)
async def get_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[Store, Depends(get_current_store)],
    day: Annotated[date | None, Query(alias="date")] = None,
) -> StoreDaySummary:
    """일별 요약 — 기본은 오늘 (Defaults to today)."""
    return await dashboard_service.store_summary(db, store, day)
