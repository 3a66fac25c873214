"""관리자 대시보드 라우터 — 전체 통계.

Admin Dashboard Router — Totals for the admin home screen.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.dashboard import AdminDashboardStats
from app.services.dashboard_service import dashboard_service

router: APIRouter = APIRouter()


@router.get("/stats", response_model=AdminDashboardStats)
async def get_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> AdminDashboardStats:
    return await dashboard_service.admin_stats(db)
