"""초기 데이터 시드 스크립트 — 관리자, 데모 매장, 데모 직원 생성.

Seed script — Creates the admin account plus a demo store and employee.
Run this script once to bootstrap the database with required initial data.

Usage:
    python -m app.seed

Creates:
    - 1개 관리자 계정: admin@pickup.local (1 admin user)
    - 1개 매장 + 매장 계정: store@pickup.local (1 store with a login)
    - 1개 직원 + 직원 계정: employee@pickup.local (1 employee with a login)

모든 계정은 DEFAULT_USER_PASSWORD로 생성되며 첫 로그인 후 변경이 필요합니다.
(Every account starts on DEFAULT_USER_PASSWORD and must change it after login.)
"""

import asyncio

from sqlalchemy import select

from app.config import settings
from app.database import async_session, engine, Base
from app.models import Employee, Store, User
from app.models.user import ROLE_ADMIN, ROLE_EMPLOYEE, ROLE_STORE
from app.repositories.user_repository import user_repository
from app.utils.logger import configure_logging, get_logger
from app.utils.password import hash_password
from app.utils.quota import current_month

logger = get_logger(__name__)

ADMIN_EMAIL: str = "admin@pickup.local"
STORE_EMAIL: str = "store@pickup.local"
EMPLOYEE_EMAIL: str = "employee@pickup.local"


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the admin account,
    one store and one employee.

    Idempotent: 관리자 계정이 있으면 건너뜁니다 (Skips if the admin already exists).
    """
    # 테이블 생성: DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(User).where(User.email == ADMIN_EMAIL))
        if result.scalar_one_or_none():
            logger.info("Already seeded. Skipping.")
            return

        password_hash: str = hash_password(settings.DEFAULT_USER_PASSWORD)

        await user_repository.create_with_role(
            db,
            email=ADMIN_EMAIL,
            full_name="Administrador",
            password_hash=password_hash,
            role=ROLE_ADMIN,
        )

        # 매장 + 매장 로그인: Store with its login account
        store_user: User = await user_repository.create_with_role(
            db,
            email=STORE_EMAIL,
            full_name="Loja Centro",
            password_hash=password_hash,
            role=ROLE_STORE,
        )
        store: Store = Store(
            user_id=store_user.id,
            name="Loja Centro",
            address="Rua Principal, 100",
            max_daily_capacity=settings.DEFAULT_STORE_CAPACITY,
        )
        db.add(store)

        # 직원 + 직원 로그인: Employee with its login account
        employee_user: User = await user_repository.create_with_role(
            db,
            email=EMPLOYEE_EMAIL,
            full_name="Funcionário Demo",
            password_hash=password_hash,
            role=ROLE_EMPLOYEE,
        )
        employee: Employee = Employee(
            user_id=employee_user.id,
            name="Funcionário Demo",
            email=EMPLOYEE_EMAIL,
            cpf="000.000.000-00",
            monthly_limit=settings.DEFAULT_MONTHLY_LIMIT,
            current_month_pickups=0,
            last_reset_month=current_month(),
        )
        db.add(employee)

        await db.commit()
        logger.info(
            "Seeded: admin=%s store=%s employee=%s (password=%s)",
            ADMIN_EMAIL,
            STORE_EMAIL,
            EMPLOYEE_EMAIL,
            settings.DEFAULT_USER_PASSWORD,
        )


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed())
