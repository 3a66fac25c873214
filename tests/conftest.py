"""테스트 인프라 — 테스트 DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Test database, session, and httpx client fixtures.
The schema is created before and dropped after every test. TEST_DATABASE_URL
selects the database; the default is an in-memory SQLite database shared
through a single connection.
"""

import os
from collections.abc import AsyncGenerator
from datetime import date, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403
from app.models.employee import Employee
from app.models.store import Store
from app.models.user import ROLE_ADMIN, ROLE_EMPLOYEE, ROLE_STORE, User
from app.repositories.user_repository import user_repository
from app.services.notification_service import notification_service
from app.utils.jwt import create_access_token
from app.utils.password import hash_password
from app.utils.quota import current_month, today

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

ADMIN_PASSWORD = "Admin123!"
STORE_PASSWORD = "Store123!"
EMPLOYEE_PASSWORD = "Employee123!"


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # 인메모리 DB를 모든 세션이 공유 (one connection keeps the in-memory DB alive)
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True}


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 생성/삭제합니다."""
    eng = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs(TEST_DATABASE_URL))
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def push_dispatch_disabled(monkeypatch):
    """기본적으로 푸시 발송을 끕니다 (Push dispatch off unless a test enables it)."""
    monkeypatch.setattr(settings, "PUSH_FUNCTIONS_URL", "")
    yield
    notification_service._transport = None


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_user(
    db: AsyncSession,
    email: str,
    role: str,
    password: str,
    full_name: str = "Test User",
    must_change_password: bool = False,
) -> User:
    """역할이 배정된 사용자를 생성합니다."""
    return await user_repository.create_with_role(
        db,
        email=email,
        full_name=full_name,
        password_hash=hash_password(password),
        role=role,
        must_change_password=must_change_password,
    )


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """관리자 사용자를 생성합니다."""
    return await make_user(db, "admin@test.com", ROLE_ADMIN, ADMIN_PASSWORD, "Test Admin")


@pytest_asyncio.fixture
async def store_user(db: AsyncSession) -> User:
    """매장 로그인 사용자를 생성합니다."""
    return await make_user(db, "store@test.com", ROLE_STORE, STORE_PASSWORD, "Loja Teste")


@pytest_asyncio.fixture
async def employee_user(db: AsyncSession) -> User:
    """직원 로그인 사용자를 생성합니다."""
    return await make_user(db, "employee@test.com", ROLE_EMPLOYEE, EMPLOYEE_PASSWORD, "Maria Silva")


@pytest_asyncio.fixture
async def store(db: AsyncSession, store_user: User) -> Store:
    """로그인 계정이 연결된 테스트 매장 (capacity 10)."""
    s = Store(user_id=store_user.id, name="Loja Teste", address="Rua A, 1", max_daily_capacity=10)
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s


@pytest_asyncio.fixture
async def other_store(db: AsyncSession) -> Store:
    """로그인 계정 없는 두 번째 매장."""
    s = Store(name="Loja Norte", address="Rua B, 2", max_daily_capacity=5)
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s


@pytest_asyncio.fixture
async def employee(db: AsyncSession, employee_user: User) -> Employee:
    """월간 한도 6인 테스트 직원."""
    e = Employee(
        user_id=employee_user.id,
        name="Maria Silva",
        email="employee@test.com",
        cpf="123.456.789-00",
        monthly_limit=6,
        current_month_pickups=0,
        last_reset_month=current_month(),
    )
    db.add(e)
    await db.flush()
    await db.refresh(e)
    return e


def make_token(user: User, role_name: str) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id), "role": role_name})


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user, ROLE_ADMIN)


@pytest.fixture
def store_token(store_user, store) -> str:
    return make_token(store_user, ROLE_STORE)


@pytest.fixture
def employee_token(employee_user, employee) -> str:
    return make_token(employee_user, ROLE_EMPLOYEE)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def future_date(days: int = 7) -> date:
    """APP_TIMEZONE 기준 미래 날짜 (A date ``days`` ahead of today)."""
    return today() + timedelta(days=days)
