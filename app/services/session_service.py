"""세션 서비스 — 로그인 직후 역할별 데이터 부트스트랩.

Session Service — Role-scoped bootstrap right after login.
Loading a session also runs the monthly quota reset sweep, so counters are
corrected as soon as anyone opens the application in a new month.

Scope by role:
    - admin: 전체 직원, 매장, 예약, 차단 날짜 (everything)
    - store: 본인 매장과 그 예약 (own store and its pickups)
    - employee: 본인 레코드와 예약, 매장 목록 (own record, own pickups, all stores)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import ROLE_ADMIN, ROLE_EMPLOYEE, ROLE_STORE, User
from app.repositories.employee_repository import employee_repository
from app.repositories.pickup_repository import pickup_repository
from app.repositories.store_repository import store_repository
from app.schemas.session import SessionResponse
from app.services.auth_service import auth_service
from app.services.calendar_service import calendar_service
from app.services.employee_service import employee_service
from app.services.pickup_service import pickup_service
from app.services.store_service import store_service
from app.utils.quota import current_month


class SessionService:
    """세션 부트스트랩 서비스."""

    async def load_session(self, db: AsyncSession, user: User) -> SessionResponse:
        """역할별 세션 데이터를 반환합니다.

        Run the monthly reset sweep, then gather the data visible to the
        caller's role.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 현재 사용자 (Current user with role loaded)

        Returns:
            SessionResponse: 역할별 데이터 (Role-scoped data)
        """
        await employee_service.reset_monthly_limits(db)
        month: str = current_month()

        response = SessionResponse(
            user=await auth_service.get_me(user),
            current_month=month,
            blocked_dates=await calendar_service.list_blocked_dates(db),
        )

        if user.role == ROLE_ADMIN:
            response.stores = await store_service.list_stores(db)
            response.employees = [employee_service.to_response(e, month) for e in await employee_repository.list_all(db)]
            response.pickups = [pickup_service.to_response(p) for p in await pickup_repository.list_filtered(db)]
        elif user.role == ROLE_STORE:
            store = await store_repository.get_by_user_id(db, user.id)
            if store is not None:
                response.store = store_service.to_response(store)
                response.stores = [response.store]
                response.pickups = await pickup_service.list_for_store(db, store)
        elif user.role == ROLE_EMPLOYEE:
            employee = await employee_repository.get_by_user_id(db, user.id)
            response.stores = await store_service.list_stores(db)
            if employee is not None:
                response.employee = employee_service.to_response(employee, month)
                response.pickups = await pickup_service.list_for_employee(db, employee)

        return response


# 싱글턴 인스턴스: Singleton instance
session_service: SessionService = SessionService()
