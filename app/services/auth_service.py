"""인증 서비스 — 로그인, 토큰 갱신, 로그아웃, 비밀번호 변경 비즈니스 로직.

Auth Service — Business logic for login, token refresh, logout and password
change. The role is read from the role-assignment table after the
credentials check and travels in the JWT payload.
"""

from datetime import datetime, timedelta, timezone

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.token import RefreshToken
from app.models.user import User
from app.repositories.auth_repository import auth_repository
from app.repositories.user_repository import user_repository
from app.schemas.auth import (
    LoginRequest,
    PasswordChangeRequest,
    RefreshRequest,
    TokenResponse,
    UserMeResponse,
)
from app.utils.exceptions import BadRequestError, ForbiddenError, UnauthorizedError
from app.utils.jwt import create_access_token, create_refresh_token, decode_token
from app.utils.logger import get_logger
from app.utils.password import hash_password, password_policy_errors, verify_password

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite 는 tz 정보 없이 반환 (SQLite returns naive datetimes)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    """

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        return {"sub": str(user.id), "role": user.role or ""}

    async def _generate_tokens(self, db: AsyncSession, user: User) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Generate an access/refresh pair and persist the refresh token. Older
        refresh tokens of the user are discarded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 역할이 로드된 사용자 (User with role assignment loaded)

        Returns:
            TokenResponse: 토큰 응답 (Token response)
        """
        payload: dict[str, str] = self._build_jwt_payload(user)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        # 기존 리프레시 토큰 정리: Clean up old refresh tokens
        await auth_repository.delete_user_refresh_tokens(db, user.id)

        expires_at: datetime = datetime.now(timezone.utc) + timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
        await auth_repository.create_refresh_token(db, user_id=user.id, token=refresh_token, expires_at=expires_at)

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            role=user.role or "",
            must_change_password=user.must_change_password,
        )

    async def login(self, db: AsyncSession, data: LoginRequest) -> TokenResponse:
        """이메일과 비밀번호로 로그인합니다.

        Log in with e-mail and password.

        Raises:
            UnauthorizedError: 잘못된 인증 정보 또는 비활성 계정
                               (Invalid credentials or deactivated account)
            ForbiddenError: 역할이 배정되지 않은 계정 (Account without a role)
        """
        user: User | None = await auth_repository.get_user_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.info("Failed login attempt for %s", data.email)
            raise UnauthorizedError("E-mail ou senha inválidos")
        if not user.is_active:
            raise UnauthorizedError("Conta desativada")
        if user.role is None:
            raise ForbiddenError("Usuário sem perfil de acesso")

        return await self._generate_tokens(db, user)

    async def refresh_tokens(self, db: AsyncSession, data: RefreshRequest) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Rotate a refresh token into a new token pair.

        Raises:
            UnauthorizedError: 유효하지 않거나 만료된 토큰 (Invalid or expired refresh token)
        """
        try:
            payload = decode_token(data.refresh_token)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Token de atualização inválido")
        if payload.get("type") != "refresh":
            raise UnauthorizedError("Token de atualização inválido")

        db_token: RefreshToken | None = await auth_repository.get_refresh_token(db, data.refresh_token)
        if db_token is None:
            raise UnauthorizedError("Token de atualização inválido")

        if _as_utc(db_token.expires_at) < datetime.now(timezone.utc):
            await auth_repository.delete_refresh_token(db, data.refresh_token)
            raise UnauthorizedError("Token de atualização expirado")

        user: User | None = await user_repository.get_with_role(db, db_token.user_id)
        if user is None or not user.is_active:
            raise UnauthorizedError("Usuário não encontrado ou inativo")

        return await self._generate_tokens(db, user)

    async def logout(self, db: AsyncSession, refresh_token: str) -> None:
        """리프레시 토큰을 폐기합니다 (Revoke the given refresh token)."""
        await auth_repository.delete_refresh_token(db, refresh_token)

    async def get_me(self, user: User) -> UserMeResponse:
        return UserMeResponse(
            id=str(user.id),
            email=user.email,
            full_name=user.full_name,
            role=user.role or "",
            is_active=user.is_active,
            must_change_password=user.must_change_password,
        )

    async def change_password(self, db: AsyncSession, user: User, data: PasswordChangeRequest) -> None:
        """비밀번호를 변경합니다.

        Change the caller's password. The new password must satisfy every
        strength rule and match its confirmation; on success the forced
        change flag is cleared.

        Raises:
            UnauthorizedError: 현재 비밀번호 불일치 (Wrong current password)
            BadRequestError: 확인 불일치 또는 정책 위반 (Mismatch or weak password)
        """
        if not verify_password(data.current_password, user.password_hash):
            raise UnauthorizedError("Senha atual incorreta")
        if data.new_password != data.confirm_password:
            raise BadRequestError("As senhas não coincidem")
        errors: list[str] = password_policy_errors(data.new_password)
        if errors:
            raise BadRequestError("; ".join(errors))
        if verify_password(data.new_password, user.password_hash):
            raise BadRequestError("A nova senha deve ser diferente da atual")

        user.password_hash = hash_password(data.new_password)
        user.must_change_password = False
        await db.flush()
        logger.info("Password changed for user %s", user.id)


# 싱글턴 인스턴스: Singleton instance
auth_service: AuthService = AuthService()
