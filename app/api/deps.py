"""FastAPI 의존성 주입 모듈 — 인증 및 역할 검사.

FastAPI dependency injection module — Authentication and role checks.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies the JWT and returns its payload)
    3. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using the payload "sub" field)
    4. 역할은 토큰이 아니라 user_roles 테이블에서 읽음
       (Role is read from user_roles, not trusted from the token)

Authorization Flow (require_roles):
    허용된 역할 목록에 없으면 403 Forbidden
    (403 when the user's role is not among the allowed roles)
"""

from typing import Annotated, Awaitable, Callable
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.employee import Employee
from app.models.store import Store
from app.models.user import ROLE_ADMIN, ROLE_EMPLOYEE, ROLE_STORE, User
from app.repositories.user_repository import user_repository
from app.services.employee_service import employee_service
from app.services.store_service import store_service
from app.utils.exceptions import ForbiddenError, UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기: Extracts the JWT from the Authorization header
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode the bearer token and return the authenticated, active user.

    Raises:
        UnauthorizedError: 토큰 누락/만료/무효 또는 비활성 사용자
                           (Missing, expired or invalid token; inactive user)
    """
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload: dict = decode_token(credentials.credentials)
        # 리프레시 토큰으로 API 호출 불가 (Refresh tokens are not access tokens)
        if payload.get("type") != "access":
            raise UnauthorizedError("Tipo de token inválido")
        user_id = UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise UnauthorizedError("Token inválido ou expirado")

    user: User | None = await user_repository.get_with_role(db, user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("Usuário não encontrado ou inativo")
    return user


def require_roles(*roles: str) -> Callable[..., Awaitable[User]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory admitting only users whose role is in ``roles``.

    Args:
        roles: 허용 역할 이름 (Allowed role names)

    Returns:
        FastAPI 의존성 함수 (Dependency returning the User or raising 403)
    """

    async def _check(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        if current_user.role not in roles:
            raise ForbiddenError()
        return current_user

    return _check


# 편의 의존성: Pre-configured role dependencies
require_admin = require_roles(ROLE_ADMIN)
require_store = require_roles(ROLE_STORE)
require_employee = require_roles(ROLE_EMPLOYEE)


async def get_current_employee(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_employee)],
) -> Employee:
    """직원 역할 사용자의 직원 레코드 (Employee record of the caller)."""
    return await employee_service.get_for_user(db, current_user)


async def get_current_store(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_store)],
) -> Store:
    """매장 역할 사용자의 매장 레코드 (Store record of the caller)."""
    return await store_service.get_for_user(db, current_user)
