"""직원 레포지토리 — 직원 CRUD 및 월간 한도 카운터 쿼리.

Employee Repository — CRUD plus the monthly quota counter writes.
Quota consumption is a conditional UPDATE so two concurrent bookings can
never push ``current_month_pickups`` past ``monthly_limit``.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.employee import Employee
from app.models.pickup import PickupSchedule
from app.repositories.base import BaseRepository
from app.utils.quota import apply_pickup_delta, needs_reset


class EmployeeRepository(BaseRepository[Employee]):
    """직원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the employees table.
    """

    def __init__(self) -> None:
        super().__init__(Employee)

    async def get_by_user_id(self, db: AsyncSession, user_id: UUID) -> Employee | None:
        """로그인 계정으로 직원을 조회합니다 (Employee linked to a login account)."""
        result = await db.execute(select(Employee).where(Employee.user_id == user_id))
        return result.scalar_one_or_none()

    async def list_all(self, db: AsyncSession, search: str | None = None) -> Sequence[Employee]:
        """직원 목록 — 이름/이메일/CPF 검색 지원.

        List employees ordered by name, optionally filtered by a case-insensitive
        search over name, e-mail and CPF.
        """
        query: Select = select(Employee).order_by(Employee.name)
        if search:
            pattern: str = f"%{search.lower()}%"
            query = query.where(
                or_(
                    func.lower(Employee.name).like(pattern),
                    func.lower(Employee.email).like(pattern),
                    Employee.cpf.like(pattern),
                )
            )
        result = await db.execute(query)
        return result.scalars().all()

    async def email_exists(self, db: AsyncSession, email: str, exclude_id: UUID | None = None) -> bool:
        query: Select = select(func.count()).select_from(Employee).where(Employee.email == email.strip().lower())
        if exclude_id is not None:
            query = query.where(Employee.id != exclude_id)
        return ((await db.execute(query)).scalar() or 0) > 0

    async def cpf_exists(self, db: AsyncSession, cpf: str, exclude_id: UUID | None = None) -> bool:
        query: Select = select(func.count()).select_from(Employee).where(Employee.cpf == cpf)
        if exclude_id is not None:
            query = query.where(Employee.id != exclude_id)
        return ((await db.execute(query)).scalar() or 0) > 0

    async def reset_if_stale(self, db: AsyncSession, employee: Employee, month: str) -> bool:
        """월이 바뀐 직원의 사용량을 0으로 초기화합니다.

        Reset the counter of one employee whose ``last_reset_month`` is stale.

        Returns:
            bool: 초기화가 일어났는지 (Whether a reset happened)
        """
        if not needs_reset(employee.last_reset_month, month):
            return False
        employee.current_month_pickups = 0
        employee.last_reset_month = month
        await db.flush()
        return True

    async def reset_stale_months(self, db: AsyncSession, month: str) -> int:
        """월이 바뀐 모든 직원의 사용량을 초기화합니다.

        Bulk monthly reset: every employee whose ``last_reset_month`` is not
        ``month`` (or is NULL) gets a zero counter stamped with ``month``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            month: 현재 월 키 "YYYY-MM" (Present month key)

        Returns:
            int: 초기화된 직원 수 (Number of employees reset)
        """
        stmt = (
            update(Employee)
            .where(or_(Employee.last_reset_month.is_(None), Employee.last_reset_month != month))
            .values(current_month_pickups=0, last_reset_month=month)
            .execution_options(synchronize_session="fetch")
        )
        result = await db.execute(stmt)
        await db.flush()
        return result.rowcount or 0

    async def consume_quota(self, db: AsyncSession, employee: Employee, quantity: int, month: str) -> bool:
        """한도 내에서만 사용량을 증가시킵니다.

        Atomically add ``quantity`` to the employee's counter, only if the
        result stays within ``monthly_limit``. A stale month is reset first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            employee: 대상 직원 (Target employee)
            quantity: 예약 수량, 1 이상 (Booked quantity)
            month: 현재 월 키 (Present month key)

        Returns:
            bool: 증가 성공 여부, False면 한도 초과 (False when the limit would be exceeded)
        """
        await self.reset_if_stale(db, employee, month)
        stmt = (
            update(Employee)
            .where(
                Employee.id == employee.id,
                Employee.current_month_pickups + quantity <= Employee.monthly_limit,
            )
            .values(current_month_pickups=Employee.current_month_pickups + quantity)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        await db.refresh(employee)
        return result.rowcount == 1

    async def restore_quota(self, db: AsyncSession, employee: Employee, quantity: int, month: str) -> Employee:
        """취소 시 사용량을 되돌립니다 (Give back ``quantity``, floored at 0).

        Uses the same stale-month rule as scheduling, so cancelling last
        month's pickup after a reset never drives the counter negative.
        """
        state = apply_pickup_delta(employee.current_month_pickups, employee.last_reset_month, -quantity, month)
        employee.current_month_pickups = state.current_month_pickups
        employee.last_reset_month = state.last_reset_month
        await db.flush()
        return employee

    async def delete_with_pickups(self, db: AsyncSession, employee: Employee) -> None:
        """직원과 그의 수령 예약을 삭제합니다 (Delete an employee and its pickups)."""
        await db.execute(delete(PickupSchedule).where(PickupSchedule.employee_id == employee.id))
        await db.delete(employee)
        await db.flush()


# 싱글턴 인스턴스: Singleton instance
employee_repository: EmployeeRepository = EmployeeRepository()
