"""사용자 및 역할 배정 관련 SQLAlchemy ORM 모델 정의.

User and role-assignment SQLAlchemy ORM model definitions.
A user account carries credentials only; its role (admin / store / employee)
lives in a separate role-assignment table that is consulted after login.

Tables:
    - users: 로그인 계정 (Login accounts)
    - user_roles: 역할 배정 (Role assignment, one row per user)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 역할 이름: Role names
ROLE_ADMIN: str = "admin"
ROLE_STORE: str = "store"
ROLE_EMPLOYEE: str = "employee"
ROLES: tuple[str, ...] = (ROLE_ADMIN, ROLE_STORE, ROLE_EMPLOYEE)


class User(Base):
    """사용자 모델 — 로그인 계정 정보.

    User model — Login account information.
    Email is globally unique and is the login identifier.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 로그인 이메일 (Login email, unique)
        full_name: 표시 이름 (Display name)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        is_active: 활성 상태 (Active status)
        must_change_password: 초기 비밀번호 사용 중 여부 (Still on the seeded default password)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        role_assignment: 역할 배정 (Role assignment row)
        refresh_tokens: 리프레시 토큰 목록 (Refresh tokens, cascade delete)
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 이메일: 전역 고유 (Globally unique login email)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 비밀번호 해시: 평문 저장 금지 (never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # 기본 비밀번호로 생성된 계정은 첫 로그인 후 변경 필요
    # Accounts created with the default password must change it after first login
    must_change_password: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계: Relationships
    role_assignment = relationship("UserRole", back_populates="user", uselist=False, cascade="all, delete-orphan", lazy="selectin")
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def role(self) -> str | None:
        """배정된 역할 이름 (Assigned role name, None if unassigned)."""
        if self.role_assignment is None:
            return None
        return self.role_assignment.role


class UserRole(Base):
    """역할 배정 모델 — 사용자당 하나의 역할.

    Role assignment model — Exactly one role per user.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 사용자 FK, 고유 (User foreign key, unique)
        role: 역할 이름 (Role: admin / store / employee)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "user_roles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    # 역할: "admin" | "store" | "employee"
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="role_assignment")
