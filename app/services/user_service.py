"""계정 서비스 — 관리자가 생성하는 로그인 계정 관리.

Account Service — Login accounts created and managed by the admin on behalf
of employees and stores. Accounts created without an explicit password get
the shared default password and must change it on first login.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import User
from app.repositories.auth_repository import auth_repository
from app.repositories.user_repository import user_repository
from app.utils.exceptions import DuplicateError, NotFoundError
from app.utils.logger import get_logger
from app.utils.password import hash_password

logger = get_logger(__name__)

DUPLICATE_EMAIL_MESSAGE: str = "Este e-mail já está cadastrado"
DUPLICATE_CPF_MESSAGE: str = "Este CPF já está cadastrado"


def duplicate_error_from(exc: IntegrityError) -> DuplicateError:
    """고유 제약 위반을 사용자 메시지로 변환합니다.

    Translate a unique-constraint violation into a localized 409 error,
    based on which column the database names in its message.
    """
    message: str = str(exc.orig).lower()
    if "cpf" in message:
        return DuplicateError(DUPLICATE_CPF_MESSAGE)
    if "email" in message:
        return DuplicateError(DUPLICATE_EMAIL_MESSAGE)
    return DuplicateError("Registro duplicado")


class UserService:
    """계정 관련 비즈니스 로직을 처리하는 서비스."""

    async def create_account(
        self,
        db: AsyncSession,
        email: str,
        full_name: str,
        role: str,
        password: str | None = None,
    ) -> User:
        """로그인 계정과 역할 배정을 생성합니다.

        Create a login account with its role assignment in the caller's
        transaction.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 로그인 이메일 (Login e-mail)
            full_name: 표시 이름 (Display name)
            role: 역할 이름 (admin / store / employee)
            password: 비밀번호, 없으면 기본 비밀번호 + 변경 강제
                      (None means the default password and a forced change)

        Returns:
            User: 생성된 사용자 (Created user)

        Raises:
            DuplicateError: 이메일 중복 (E-mail already registered)
        """
        if await user_repository.email_exists(db, email):
            raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)

        try:
            user: User = await user_repository.create_with_role(
                db,
                email=email,
                full_name=full_name,
                password_hash=hash_password(password or settings.DEFAULT_USER_PASSWORD),
                role=role,
                must_change_password=password is None,
            )
        except IntegrityError as exc:
            raise duplicate_error_from(exc) from exc

        logger.info("Created %s account %s", role, user.id)
        return user

    async def update_account(
        self,
        db: AsyncSession,
        user_id: UUID,
        email: str | None = None,
        full_name: str | None = None,
    ) -> None:
        """계정의 이메일/이름을 연결된 레코드와 맞춥니다 (Keep account fields in sync)."""
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            return
        if email is not None and email.strip().lower() != user.email:
            if await user_repository.email_exists(db, email, exclude_user_id=user_id):
                raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)
            user.email = email.strip().lower()
        if full_name is not None:
            user.full_name = full_name
        await db.flush()

    async def delete_account(self, db: AsyncSession, user_id: UUID) -> None:
        """계정, 역할 배정, 리프레시 토큰을 삭제합니다 (Delete the account and its role)."""
        user: User | None = await user_repository.get_with_role(db, user_id)
        if user is None:
            return
        await auth_repository.delete_user_refresh_tokens(db, user_id)
        await db.delete(user)
        await db.flush()
        logger.info("Deleted account %s", user_id)

    async def reset_password(self, db: AsyncSession, user_id: UUID) -> None:
        """비밀번호를 기본값으로 초기화합니다.

        Reset an account to the default password, force a change on the
        next login, and revoke its sessions.

        Raises:
            NotFoundError: 계정 없음 (Account not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("Usuário não encontrado")
        user.password_hash = hash_password(settings.DEFAULT_USER_PASSWORD)
        user.must_change_password = True
        await auth_repository.delete_user_refresh_tokens(db, user_id)
        await db.flush()
        logger.info("Password reset to default for user %s", user_id)


# 싱글턴 인스턴스: Singleton instance
user_service: UserService = UserService()
