"""알림 서비스 — 푸시 알림 엣지 함수 호출 및 구독 저장.

Notification Service — Dispatch to the push-notification edge functions and
storage of browser push subscriptions.

Dispatch is best-effort: it runs after the pickup transition has been
committed (FastAPI BackgroundTasks), and transport errors or non-2xx replies
are logged and swallowed so they never affect the booking.

Edge functions (POST ``{PUSH_FUNCTIONS_URL}/<name>``):
    - notify-store-pickup: storeId, pickupToken, pickupDate, quantity, employeeName
    - notify-employee-pickup: employeeId, status, token, storeName, pickupDate, reason?
"""

from datetime import date
from typing import Any
from uuid import UUID

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.notification import PushSubscription
from app.models.user import User
from app.repositories.push_subscription_repository import push_subscription_repository
from app.schemas.push import PushSubscriptionCreate, PushSubscriptionResponse
from app.utils.exceptions import BadRequestError
from app.utils.logger import get_logger

logger = get_logger(__name__)

NOTIFY_STORE_PICKUP: str = "notify-store-pickup"
NOTIFY_EMPLOYEE_PICKUP: str = "notify-employee-pickup"


class NotificationService:
    """푸시 알림 서비스.

    Push notification service. ``_transport`` may be replaced (for example
    with ``httpx.MockTransport``) to capture outgoing calls.
    """

    def __init__(self) -> None:
        self._transport: httpx.AsyncBaseTransport | None = None

    @property
    def enabled(self) -> bool:
        return bool(settings.PUSH_FUNCTIONS_URL)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if settings.PUSH_FUNCTIONS_KEY:
            headers["Authorization"] = f"Bearer {settings.PUSH_FUNCTIONS_KEY}"
        return headers

    async def _invoke(self, function_name: str, payload: dict[str, Any]) -> bool:
        """엣지 함수를 호출합니다. 실패는 로그만 남깁니다.

        Invoke an edge function. Failures are logged at WARNING and reported
        through the return value only.

        Args:
            function_name: 엣지 함수 이름 (Edge function name)
            payload: JSON 본문 (JSON body)

        Returns:
            bool: 2xx 응답 여부 (True on a 2xx reply)
        """
        if not self.enabled:
            logger.debug("Push dispatch disabled, skipping %s", function_name)
            return False

        url: str = f"{settings.PUSH_FUNCTIONS_URL.rstrip('/')}/{function_name}"
        try:
            async with httpx.AsyncClient(
                timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
                transport=self._transport,
            ) as client:
                response: httpx.Response = await client.post(url, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning("Push dispatch to %s failed: %s", function_name, exc)
            return False

        if response.is_success:
            logger.info("Push dispatch to %s succeeded", function_name)
            return True
        logger.warning("Push dispatch to %s returned %s: %s", function_name, response.status_code, response.text[:200])
        return False

    async def notify_store_pickup(
        self,
        store_id: UUID,
        pickup_token: str,
        pickup_date: date,
        quantity: int,
        employee_name: str,
    ) -> bool:
        """매장에 새 예약을 알립니다 (Tell the store about a new booking)."""
        return await self._invoke(NOTIFY_STORE_PICKUP, {
            "storeId": str(store_id),
            "pickupToken": pickup_token,
            "pickupDate": pickup_date.isoformat(),
            "quantity": quantity,
            "employeeName": employee_name,
        })

    async def notify_employee_pickup(
        self,
        employee_id: UUID,
        status: str,
        token: str,
        store_name: str,
        pickup_date: date,
        reason: str | None = None,
    ) -> bool:
        """직원에게 수령 완료/취소를 알립니다 (Tell the employee about a confirm or cancel)."""
        payload: dict[str, Any] = {
            "employeeId": str(employee_id),
            "status": status,
            "token": token,
            "storeName": store_name,
            "pickupDate": pickup_date.isoformat(),
        }
        if reason:
            payload["reason"] = reason
        return await self._invoke(NOTIFY_EMPLOYEE_PICKUP, payload)

    # --- 구독 저장 (Subscription storage) ---

    async def save_subscription(
        self,
        db: AsyncSession,
        user: User,
        data: PushSubscriptionCreate,
    ) -> PushSubscriptionResponse:
        """브라우저 푸시 구독을 저장합니다.

        Save (upsert) the caller's browser push subscription.

        Raises:
            BadRequestError: 엔드포인트 또는 키 누락 (Missing endpoint or keys)
        """
        if not data.endpoint or data.keys is None or not data.keys.p256dh or not data.keys.auth:
            raise BadRequestError("Dados de inscrição inválidos")

        subscription: PushSubscription = await push_subscription_repository.upsert(
            db,
            user_id=user.id,
            role=user.role or "",
            endpoint=data.endpoint,
            p256dh=data.keys.p256dh,
            auth=data.keys.auth,
        )
        return PushSubscriptionResponse(
            id=str(subscription.id),
            user_id=str(subscription.user_id),
            role=subscription.role,
            endpoint=subscription.endpoint,
            created_at=subscription.created_at,
        )


# 싱글턴 인스턴스: Singleton instance
notification_service: NotificationService = NotificationService()
