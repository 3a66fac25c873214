"""세션 라우터 — 로그인 직후 역할별 데이터 조회.

Session Router — Role-scoped bootstrap data, also running the monthly
quota reset sweep.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.session import SessionResponse
from app.services.session_service import session_service

router: APIRouter = APIRouter()


@router.get("", response_model=SessionResponse)
async def load_session(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> SessionResponse:
    """세션 데이터 조회 (월간 초기화 포함, includes the monthly reset)."""
    result: SessionResponse = await session_service.load_session(db, current_user)
    await db.commit()
    return result
