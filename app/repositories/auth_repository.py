"""인증 레포지토리 — 리프레시 토큰 CRUD 및 이메일 기반 사용자 조회.

Auth Repository — Refresh token lifecycle and credential lookup by e-mail.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.token import RefreshToken
from app.models.user import User


class AuthRepository:
    """인증 관련 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling authentication-related database queries.
    """

    async def get_user_by_email(self, db: AsyncSession, email: str) -> User | None:
        """이메일로 사용자를 조회합니다 (역할 배정 포함).

        Retrieve a user by e-mail (case-insensitive) with its role assignment loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 로그인 이메일 (Login e-mail)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        query: Select = (
            select(User)
            .options(selectinload(User.role_assignment))
            .where(User.email == email.strip().lower())
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> RefreshToken:
        """새 리프레시 토큰을 저장합니다 (Persist a newly issued refresh token)."""
        db_token: RefreshToken = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
        db.add(db_token)
        await db.flush()
        await db.refresh(db_token)
        return db_token

    async def get_refresh_token(self, db: AsyncSession, token: str) -> RefreshToken | None:
        result = await db.execute(select(RefreshToken).where(RefreshToken.token == token))
        return result.scalar_one_or_none()

    async def delete_refresh_token(self, db: AsyncSession, token: str) -> bool:
        """리프레시 토큰을 삭제합니다.

        Delete a specific refresh token (rotation).

        Returns:
            bool: 삭제 성공 여부 (Whether the token existed)
        """
        db_token: RefreshToken | None = await self.get_refresh_token(db, token)
        if db_token is None:
            return False

        await db.delete(db_token)
        await db.flush()
        return True

    async def delete_user_refresh_tokens(self, db: AsyncSession, user_id: UUID) -> None:
        """특정 사용자의 모든 리프레시 토큰을 삭제합니다 (Logout from all devices)."""
        await db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        await db.flush()


# 싱글턴 인스턴스: Singleton instance
auth_repository: AuthRepository = AuthRepository()
