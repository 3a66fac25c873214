"""수령 예약 SQLAlchemy ORM 모델 정의.

Pickup schedule SQLAlchemy ORM model definition.

Tables:
    - pickup_schedules: 직원의 매장 수령 예약 (Employee pickup reservations)
"""

import uuid
from datetime import date as date_type, datetime, timezone
from sqlalchemy import String, Integer, Date, DateTime, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 상태 값: Status values
STATUS_SCHEDULED: str = "scheduled"
STATUS_COMPLETED: str = "completed"
STATUS_CANCELLED: str = "cancelled"
# 이전 버전에서 생성된 행에만 존재 (Only present on rows written by an older client)
STATUS_PENDING: str = "pending"

# 확인(수령 완료) 가능한 상태: Statuses a store may confirm
CONFIRMABLE_STATUSES: tuple[str, ...] = (STATUS_SCHEDULED, STATUS_PENDING)


class PickupSchedule(Base):
    """수령 예약 모델.

    Pickup schedule model — One employee's reservation to collect a quantity
    of product at a store on a date.

    Status Flow:
        scheduled → completed (매장이 토큰으로 확인, store confirms by token)
        scheduled → cancelled (매장이 사유와 함께 취소, store cancels with a reason)
        completed / cancelled 는 종료 상태 (terminal, never reopened)

    Attributes:
        employee_id: 직원 FK (Employee foreign key)
        store_id: 매장 FK (Store foreign key)
        scheduled_date: 수령 날짜 (Pickup date)
        quantity: 수량 (Quantity, counted against the monthly quota)
        observations: 메모 (Free-text observations)
        token: 수령 토큰 — 확인/취소에 사용 (Bearer token for confirm/cancel)
        status: 상태 (scheduled / completed / cancelled)
        completed_at: 수령 완료 일시 (Completion timestamp)
        cancelled_at: 취소 일시 (Cancellation timestamp)
        cancellation_reason: 취소 사유 (Cancellation reason)
    """

    __tablename__ = "pickup_schedules"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    employee_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    scheduled_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    observations: Mapped[str | None] = mapped_column(Text, nullable=True)
    token: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=STATUS_SCHEDULED)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_pickup_schedules_store_date", "store_id", "scheduled_date"),
        Index("ix_pickup_schedules_employee", "employee_id"),
    )

    employee = relationship("Employee", back_populates="pickups", lazy="selectin")
    store = relationship("Store", back_populates="pickups", lazy="selectin")
