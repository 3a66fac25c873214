"""직원 API 라우터 패키지 — 직원 역할 엔드포인트 통합.

Employee API Router package — Endpoints for the employee role.

Included routers:
    - pickups: 예약 생성/조회, 매장 수용량 (Scheduling, own pickups, availability)
    - profile: 본인 레코드 (Own record)
"""

from fastapi import APIRouter

from app.api.employee.pickups import router as pickups_router
from app.api.employee.profile import router as profile_router

employee_router: APIRouter = APIRouter()

employee_router.include_router(pickups_router, prefix="/pickups", tags=["Employee Pickups"])
employee_router.include_router(profile_router, prefix="/profile", tags=["Employee Profile"])
