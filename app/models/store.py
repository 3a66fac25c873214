"""매장 및 일자별 수용량 관련 SQLAlchemy ORM 모델 정의.

Store and per-date capacity SQLAlchemy ORM model definitions.

Tables:
    - stores: 수령 매장 (Pickup stores with a default daily capacity)
    - store_capacities: 매장+날짜별 수용량 (Per store/date booking counter and override)
"""

import uuid
from datetime import date as date_type, datetime, timezone
from sqlalchemy import String, Integer, Date, DateTime, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Store(Base):
    """매장 모델 — 직원이 제품을 수령하는 장소.

    Store model — Location where employees collect products.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 매장 로그인 계정 FK, 선택 (Optional store login account)
        name: 매장 이름 (Store name)
        address: 매장 주소 (Store address / location)
        max_daily_capacity: 기본 일일 수용량 (Default number of pickups per day)

    Relationships:
        capacities: 날짜별 수용량 행 (Per-date capacity rows, cascade delete)
        pickups: 수령 예약 목록 (Pickup schedules, cascade delete)
    """

    __tablename__ = "stores"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 매장 계정: 로그인 없는 매장도 허용 (store without a login is allowed)
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), unique=True, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    max_daily_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User")
    capacities = relationship("StoreCapacity", back_populates="store", cascade="all, delete-orphan", passive_deletes=True)
    pickups = relationship("PickupSchedule", back_populates="store", cascade="all, delete-orphan", passive_deletes=True)


class StoreCapacity(Base):
    """매장 일자별 수용량 모델.

    Per-date store capacity row. Created lazily on the first booking or the
    first admin override for that date; a missing row means the store default
    capacity with zero bookings.

    Attributes:
        store_id: 매장 FK (Store foreign key)
        date: 대상 날짜 (Target date)
        max_capacity: 날짜별 수용량 재정의, NULL이면 매장 기본값
                      (Date override; NULL falls back to the store default)
        used_capacity: 예약된 수령 건수 (Bookings counted for the date)
    """

    __tablename__ = "store_capacities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    max_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    used_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("store_id", "date", name="uq_store_capacity_store_date"),
    )

    store = relationship("Store", back_populates="capacities")
