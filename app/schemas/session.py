"""세션 부트스트랩 응답 스키마 정의.

Session bootstrap response schema. Everything the client needs right after
login, scoped to the caller's role.
"""

from pydantic import BaseModel

from app.schemas.auth import UserMeResponse
from app.schemas.calendar import BlockedDateResponse
from app.schemas.employee import EmployeeResponse
from app.schemas.pickup import PickupResponse
from app.schemas.store import StoreResponse


class SessionResponse(BaseModel):
    """역할별 세션 데이터.

    Role-scoped session data.

    Attributes:
        user: 현재 사용자 (Current user)
        current_month: 현재 월 키 (Present month key)
        employee: 직원 본인 레코드, 직원 역할만 (Own employee record)
        store: 매장 본인 레코드, 매장 역할만 (Own store record)
        stores: 매장 목록 (Stores visible to the caller)
        employees: 직원 목록, 관리자만 (All employees, admin only)
        pickups: 범위 내 수령 예약 (Pickups in the caller's scope)
        blocked_dates: 차단 날짜 목록 (Blocked dates)
    """

    user: UserMeResponse
    current_month: str
    employee: EmployeeResponse | None = None
    store: StoreResponse | None = None
    stores: list[StoreResponse] = []
    employees: list[EmployeeResponse] = []
    pickups: list[PickupResponse] = []
    blocked_dates: list[BlockedDateResponse] = []
