"""직원 서비스 — 직원 CRUD 및 월간 한도 관리 비즈니스 로직.

Employee Service — Employee CRUD plus monthly quota administration.
Creating an employee writes its login account (role ``employee``, default
password) and the employee row in one transaction.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.employee import Employee
from app.models.pickup import PickupSchedule, STATUS_SCHEDULED
from app.models.user import ROLE_EMPLOYEE, User
from app.repositories.employee_repository import employee_repository
from app.repositories.pickup_repository import pickup_repository
from app.repositories.store_capacity_repository import store_capacity_repository
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate, ResetMonthlyResponse
from app.services.user_service import (
    DUPLICATE_CPF_MESSAGE,
    DUPLICATE_EMAIL_MESSAGE,
    duplicate_error_from,
    user_service,
)
from app.utils.exceptions import DuplicateError, NotFoundError
from app.utils.logger import get_logger
from app.utils.quota import current_month, effective_pickups, remaining_quota

logger = get_logger(__name__)


class EmployeeService:
    """직원 관련 비즈니스 로직을 처리하는 서비스."""

    def to_response(self, employee: Employee, month: str | None = None) -> EmployeeResponse:
        """직원 모델을 응답 스키마로 변환합니다.

        Convert an Employee to its response. Counters are reported for
        ``month`` (default: present month), so a stale counter reads as 0.
        """
        month = month or current_month()
        return EmployeeResponse(
            id=str(employee.id),
            user_id=str(employee.user_id),
            name=employee.name,
            email=employee.email,
            cpf=employee.cpf,
            monthly_limit=employee.monthly_limit,
            current_month_pickups=effective_pickups(employee.current_month_pickups, employee.last_reset_month, month),
            remaining_quota=remaining_quota(
                employee.monthly_limit, employee.current_month_pickups, employee.last_reset_month, month
            ),
            last_reset_month=employee.last_reset_month,
            created_at=employee.created_at,
        )

    async def get_or_404(self, db: AsyncSession, employee_id: UUID) -> Employee:
        employee: Employee | None = await employee_repository.get_by_id(db, employee_id)
        if employee is None:
            raise NotFoundError("Funcionário não encontrado")
        return employee

    async def get_for_user(self, db: AsyncSession, user: User) -> Employee:
        """로그인 사용자의 직원 레코드 (Employee record of the logged-in user)."""
        employee: Employee | None = await employee_repository.get_by_user_id(db, user.id)
        if employee is None:
            raise NotFoundError("Funcionário não encontrado")
        return employee

    async def list_employees(self, db: AsyncSession, search: str | None = None) -> list[EmployeeResponse]:
        employees: Sequence[Employee] = await employee_repository.list_all(db, search)
        month: str = current_month()
        return [self.to_response(e, month) for e in employees]

    async def get_employee(self, db: AsyncSession, employee_id: UUID) -> EmployeeResponse:
        return self.to_response(await self.get_or_404(db, employee_id))

    async def create_employee(self, db: AsyncSession, data: EmployeeCreate) -> EmployeeResponse:
        """직원과 로그인 계정을 생성합니다.

        Create an employee and its login account.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 직원 생성 데이터 (Employee creation data)

        Returns:
            EmployeeResponse: 생성된 직원 (Created employee)

        Raises:
            DuplicateError: 이메일 또는 CPF 중복 (Duplicate e-mail or CPF)
        """
        email: str = data.email.strip().lower()
        if await employee_repository.email_exists(db, email):
            raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)
        if await employee_repository.cpf_exists(db, data.cpf):
            raise DuplicateError(DUPLICATE_CPF_MESSAGE)

        user: User = await user_service.create_account(db, email=email, full_name=data.name, role=ROLE_EMPLOYEE)
        try:
            employee: Employee = await employee_repository.create(db, {
                "user_id": user.id,
                "name": data.name,
                "email": email,
                "cpf": data.cpf,
                "monthly_limit": data.monthly_limit if data.monthly_limit is not None else settings.DEFAULT_MONTHLY_LIMIT,
                "current_month_pickups": 0,
                "last_reset_month": current_month(),
            })
        except IntegrityError as exc:
            raise duplicate_error_from(exc) from exc

        logger.info("Created employee %s", employee.id)
        return self.to_response(employee)

    async def update_employee(self, db: AsyncSession, employee_id: UUID, data: EmployeeUpdate) -> EmployeeResponse:
        """직원 정보를 수정합니다 (Partial update; account e-mail/name follow)."""
        employee: Employee = await self.get_or_404(db, employee_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in update_data:
            update_data["email"] = update_data["email"].strip().lower()
            if await employee_repository.email_exists(db, update_data["email"], exclude_id=employee.id):
                raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)
        if "cpf" in update_data and await employee_repository.cpf_exists(db, update_data["cpf"], exclude_id=employee.id):
            raise DuplicateError(DUPLICATE_CPF_MESSAGE)

        await user_service.update_account(
            db, employee.user_id, email=update_data.get("email"), full_name=update_data.get("name")
        )
        try:
            updated: Employee | None = await employee_repository.update(db, employee.id, update_data)
        except IntegrityError as exc:
            raise duplicate_error_from(exc) from exc
        return self.to_response(updated or employee)

    async def delete_employee(self, db: AsyncSession, employee_id: UUID) -> None:
        """직원, 예약, 로그인 계정을 삭제합니다.

        Delete an employee with its pickups and login account. Slots held by
        still-scheduled pickups are released first.
        """
        employee: Employee = await self.get_or_404(db, employee_id)
        scheduled: Sequence[PickupSchedule] = await pickup_repository.list_filtered(
            db, employee_id=employee.id, status=STATUS_SCHEDULED
        )
        for pickup in scheduled:
            await store_capacity_repository.adjust(db, pickup.store, pickup.scheduled_date, -1)

        user_id: UUID = employee.user_id
        await employee_repository.delete_with_pickups(db, employee)
        await user_service.delete_account(db, user_id)
        logger.info("Deleted employee %s", employee_id)

    async def reset_password(self, db: AsyncSession, employee_id: UUID) -> None:
        employee: Employee = await self.get_or_404(db, employee_id)
        await user_service.reset_password(db, employee.user_id)

    async def reset_monthly_limits(self, db: AsyncSession) -> ResetMonthlyResponse:
        """월이 바뀐 모든 직원의 사용량을 초기화합니다 (Monthly reset sweep)."""
        month: str = current_month()
        count: int = await employee_repository.reset_stale_months(db, month)
        if count:
            logger.info("Monthly reset for %s: %d employee(s)", month, count)
        return ResetMonthlyResponse(month=month, reset_count=count)


# 싱글턴 인스턴스: Singleton instance
employee_service: EmployeeService = EmployeeService()
