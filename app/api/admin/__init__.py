"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints into a
single router for inclusion in the FastAPI application.

Included routers:
    - employees: 직원 관리 및 월간 한도 초기화 (Employees and monthly reset)
    - stores: 매장 관리 및 일자별 수용량 (Stores and per-date capacity)
    - pickups: 전체 예약 조회 (All pickups)
    - blocked_dates: 차단 날짜 관리 (Blocked dates)
    - dashboard: 통계 (Stats)
"""

from fastapi import APIRouter

from app.api.admin.employees import router as employees_router
from app.api.admin.stores import router as stores_router
from app.api.admin.pickups import router as pickups_router
from app.api.admin.blocked_dates import router as blocked_dates_router
from app.api.admin.dashboard import router as dashboard_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(employees_router, prefix="/employees", tags=["Admin Employees"])
admin_router.include_router(stores_router, prefix="/stores", tags=["Admin Stores"])
admin_router.include_router(pickups_router, prefix="/pickups", tags=["Admin Pickups"])
admin_router.include_router(blocked_dates_router, prefix="/blocked-dates", tags=["Admin Blocked Dates"])
admin_router.include_router(dashboard_router, prefix="/dashboard", tags=["Admin Dashboard"])
