"""푸시 구독 라우터 — 브라우저 구독 저장 및 VAPID 공개키 조회.

Push Router — Browser push subscription storage and the VAPID public key.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.push import PushSubscriptionCreate, PushSubscriptionResponse, VapidPublicKeyResponse
from app.services.notification_service import notification_service

router: APIRouter = APIRouter()


@router.post("/subscriptions", response_model=PushSubscriptionResponse, status_code=201)
async def save_subscription(
    data: PushSubscriptionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PushSubscriptionResponse:
    """푸시 구독 저장 — (사용자, 엔드포인트) 기준 upsert."""
    result: PushSubscriptionResponse = await notification_service.save_subscription(db, current_user, data)
    await db.commit()
    return result


@router.get("/vapid-public-key", response_model=VapidPublicKeyResponse)
async def get_vapid_public_key() -> VapidPublicKeyResponse:
    return VapidPublicKeyResponse(public_key=settings.VAPID_PUBLIC_KEY)
