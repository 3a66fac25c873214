"""푸시 구독 SQLAlchemy ORM 모델 정의.

Push subscription SQLAlchemy ORM model definition.
Stores Web Push subscriptions registered by browsers; delivery is done by
the external push edge functions reading this table.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Text, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class PushSubscription(Base):
    """푸시 구독 모델.

    Push subscription model — One row per (user, browser endpoint).

    Attributes:
        user_id: 구독 사용자 FK (Subscribing user)
        role: 구독 시점의 역할 (Role at subscription time)
        endpoint: 푸시 서비스 엔드포인트 URL (Push service endpoint)
        p256dh: 클라이언트 공개키 (Client public key)
        auth: 인증 시크릿 (Auth secret)
    """

    __tablename__ = "push_subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    endpoint: Mapped[str] = mapped_column(Text, nullable=False)
    p256dh: Mapped[str] = mapped_column(String(255), nullable=False)
    auth: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "endpoint", name="uq_push_subscription_user_endpoint"),
    )
