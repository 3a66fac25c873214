"""직원 SQLAlchemy ORM 모델 정의.

Employee SQLAlchemy ORM model definition.
An employee owns a monthly pickup quota that is consumed when a pickup
is scheduled and restored when it is cancelled.

Tables:
    - employees: 직원 및 월간 수령 한도 (Employees and their monthly quota)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Integer, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Employee(Base):
    """직원 모델 — 월간 수령 한도를 가진 직원.

    Employee model — Staff member with a monthly pickup quota.

    Quota Invariant:
        last_reset_month가 현재 월과 다르면 current_month_pickups는 0으로 간주되고
        다음 쓰기 시 0으로 초기화됩니다.
        (When last_reset_month differs from the present month, the counter is
        treated as 0 and reset on the next write.)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 로그인 계정 FK (Login account foreign key)
        name: 이름 (Full name)
        email: 이메일, 고유 (Email, unique)
        cpf: CPF 번호, 고유 (Brazilian taxpayer id, unique)
        monthly_limit: 월간 수령 한도 (Monthly pickup limit)
        current_month_pickups: 이번 달 사용량 (Quantity consumed this month)
        last_reset_month: 마지막 초기화 월 "YYYY-MM" (Last reset month)
    """

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    cpf: Mapped[str] = mapped_column(String(14), unique=True, nullable=False)
    monthly_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    current_month_pickups: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # "YYYY-MM" 형식: Stored as a month string, not a date
    last_reset_month: Mapped[str | None] = mapped_column(String(7), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User")
    pickups = relationship("PickupSchedule", back_populates="employee", cascade="all, delete-orphan", passive_deletes=True)
