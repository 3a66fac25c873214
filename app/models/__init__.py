"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every table on Base.metadata, which
Alembic autogenerate and relationship resolution depend on.

Modules:
    user: 사용자 및 역할 배정 (User and UserRole)
    token: 리프레시 토큰 (Refresh tokens)
    employee: 직원 및 월간 한도 (Employees with monthly quota)
    store: 매장 및 일자별 수용량 (Store and StoreCapacity)
    pickup: 수령 예약 (Pickup schedules)
    calendar: 차단 날짜 (Blocked dates)
    notification: 푸시 구독 (Push subscriptions)
"""

from app.models.user import User, UserRole
from app.models.token import RefreshToken
from app.models.employee import Employee
from app.models.store import Store, StoreCapacity
from app.models.pickup import PickupSchedule
from app.models.calendar import BlockedDate
from app.models.notification import PushSubscription

__all__ = [
    "User", "UserRole",
    "RefreshToken",
    "Employee",
    "Store", "StoreCapacity",
    "PickupSchedule",
    "BlockedDate",
    "PushSubscription",
]
