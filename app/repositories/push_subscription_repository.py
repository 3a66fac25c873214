"""푸시 구독 레포지토리.

Push Subscription Repository — Upsert of browser push subscriptions.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.notification import PushSubscription
from app.repositories.base import BaseRepository


class PushSubscriptionRepository(BaseRepository[PushSubscription]):
    """push_subscriptions 테이블 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(PushSubscription)

    async def get_by_endpoint(self, db: AsyncSession, user_id: UUID, endpoint: str) -> PushSubscription | None:
        query: Select = select(PushSubscription).where(
            PushSubscription.user_id == user_id,
            PushSubscription.endpoint == endpoint,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        db: AsyncSession,
        user_id: UUID,
        role: str,
        endpoint: str,
        p256dh: str,
        auth: str,
    ) -> PushSubscription:
        """(user_id, endpoint) 기준으로 구독을 생성하거나 키를 갱신합니다.

        Create the subscription for (user_id, endpoint), or refresh its keys
        and role when the browser re-subscribes.
        """
        subscription: PushSubscription | None = await self.get_by_endpoint(db, user_id, endpoint)
        if subscription is None:
            subscription = PushSubscription(user_id=user_id, role=role, endpoint=endpoint, p256dh=p256dh, auth=auth)
            db.add(subscription)
        else:
            subscription.role = role
            subscription.p256dh = p256dh
            subscription.auth = auth
        await db.flush()
        await db.refresh(subscription)
        return subscription


# 싱글턴 인스턴스: Singleton instance
push_subscription_repository: PushSubscriptionRepository = PushSubscriptionRepository()
