"""대시보드 서비스 — 관리자/매장 통계.

Dashboard Service — Admin totals and the store's daily summary.
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.pickup import STATUS_CANCELLED, STATUS_COMPLETED, STATUS_PENDING, STATUS_SCHEDULED
from app.models.store import Store
from app.repositories.employee_repository import employee_repository
from app.repositories.pickup_repository import pickup_repository
from app.repositories.store_repository import store_repository
from app.schemas.dashboard import AdminDashboardStats
from app.schemas.pickup import StoreDaySummary
from app.services.pickup_service import pickup_service
from app.utils.quota import today


class DashboardService:
    """대시보드 통계 서비스."""

    async def admin_stats(self, db: AsyncSession) -> AdminDashboardStats:
        """관리자 대시보드 통계 (Totals across all stores and employees)."""
        counts: dict[str, int] = await pickup_repository.count_by_status(db)
        return AdminDashboardStats(
            total_employees=await employee_repository.count(db),
            total_stores=await store_repository.count(db),
            products_picked_up=await pickup_repository.completed_quantity(db),
            scheduled_pickups=counts.get(STATUS_SCHEDULED, 0) + counts.get(STATUS_PENDING, 0),
            completed_pickups=counts.get(STATUS_COMPLETED, 0),
            cancelled_pickups=counts.get(STATUS_CANCELLED, 0),
        )

    async def store_summary(self, db: AsyncSession, store: Store, day: date | None = None) -> StoreDaySummary:
        """매장 일별 요약, 기본은 오늘 (Store summary for ``day``, default today)."""
        return await pickup_service.day_summary(db, store, day or today())


# 싱글턴 인스턴스: Singleton instance
dashboard_service: DashboardService = DashboardService()
