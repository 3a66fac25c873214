"""매장 API 라우터 패키지 — 매장 역할 엔드포인트 통합.

Store API Router package — Endpoints for the store role.

Included routers:
    - pickups: 토큰 확인/취소 및 예약 목록 (Token confirm/cancel, pickup list)
    - dashboard: 일별 요약 (Daily summary)
"""

from fastapi import APIRouter

from app.api.store.pickups import router as pickups_router
from app.api.store.dashboard import router as dashboard_router

store_router: APIRouter = APIRouter()

store_router.include_router(pickups_router, prefix="/pickups", tags=["Store Pickups"])
store_router.include_router(dashboard_router, prefix="/dashboard", tags=["Store Dashboard"])
