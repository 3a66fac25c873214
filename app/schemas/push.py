"""푸시 구독 관련 Pydantic 요청/응답 스키마 정의.

Push subscription Pydantic schemas. The request mirrors the browser's
``PushSubscription.toJSON()`` shape.
"""

from datetime import datetime
from pydantic import BaseModel


class PushSubscriptionKeys(BaseModel):
    """구독 키 (Subscription keys from the browser)."""

    p256dh: str | None = None  # 클라이언트 공개키 (Client public key)
    auth: str | None = None  # 인증 시크릿 (Auth secret)


class PushSubscriptionCreate(BaseModel):
    """푸시 구독 저장 요청 스키마.

    Attributes:
        endpoint: 푸시 서비스 엔드포인트 (Push service endpoint URL)
        keys: p256dh/auth 키 (Subscription keys, both required)
    """

    endpoint: str  # 엔드포인트 URL
    keys: PushSubscriptionKeys | None = None  # 구독 키


class PushSubscriptionResponse(BaseModel):
    """푸시 구독 응답 스키마."""

    id: str  # 구독 UUID 문자열
    user_id: str  # 사용자 UUID 문자열
    role: str  # 역할 (Role at subscription time)
    endpoint: str  # 엔드포인트 URL
    created_at: datetime  # 생성 일시 UTC


class VapidPublicKeyResponse(BaseModel):
    """VAPID 공개키 응답 (Public key the browser subscribes with)."""

    public_key: str
