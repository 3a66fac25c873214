"""차단 날짜 SQLAlchemy ORM 모델 정의.

Blocked date SQLAlchemy ORM model definition.
A blocked date forbids new pickups at every store regardless of capacity.
"""

import uuid
from datetime import date as date_type, datetime, timezone
from sqlalchemy import Date, DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class BlockedDate(Base):
    """차단 날짜 모델 (Blocked date model).

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        date: 차단 날짜, 고유 (Blocked date, unique)
        reason: 사유, 선택 (Optional reason)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "blocked_dates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    date: Mapped[date_type] = mapped_column(Date, unique=True, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
