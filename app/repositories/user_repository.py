"""사용자 레포지토리 — 계정 및 역할 배정 쿼리.

User Repository — Account and role-assignment queries.
Account creation writes the user and its role row in the caller's
transaction; the linked employee/store row is added by the caller.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.user import User, UserRole
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users and user_roles tables.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_with_role(self, db: AsyncSession, user_id: UUID) -> User | None:
        """역할 배정과 함께 사용자를 조회합니다 (User with its role assignment loaded)."""
        query: Select = (
            select(User)
            .options(selectinload(User.role_assignment))
            .where(User.id == user_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def email_exists(self, db: AsyncSession, email: str, exclude_user_id: UUID | None = None) -> bool:
        """이메일 중복 여부 (Whether another account already uses the e-mail)."""
        query: Select = select(func.count()).select_from(User).where(User.email == email.strip().lower())
        if exclude_user_id is not None:
            query = query.where(User.id != exclude_user_id)
        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def create_with_role(
        self,
        db: AsyncSession,
        email: str,
        full_name: str,
        password_hash: str,
        role: str,
        must_change_password: bool = True,
    ) -> User:
        """사용자와 역할 배정을 함께 생성합니다.

        Create a user row and its role assignment, flushed but not committed.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 로그인 이메일, 소문자로 저장 (Stored lower-cased)
            full_name: 표시 이름 (Display name)
            password_hash: bcrypt 해시 (bcrypt hash)
            role: 역할 이름 (admin / store / employee)
            must_change_password: 첫 로그인 후 변경 필요 여부

        Returns:
            User: 생성된 사용자 (Created user with role assignment)
        """
        user: User = User(
            email=email.strip().lower(),
            full_name=full_name,
            password_hash=password_hash,
            must_change_password=must_change_password,
        )
        user.role_assignment = UserRole(role=role)
        db.add(user)
        await db.flush()
        return user

    async def get_role(self, db: AsyncSession, user_id: UUID) -> str | None:
        """사용자의 역할 이름 (Role name assigned to the user, or None)."""
        result = await db.execute(select(UserRole.role).where(UserRole.user_id == user_id))
        return result.scalar_one_or_none()


# 싱글턴 인스턴스: Singleton instance
user_repository: UserRepository = UserRepository()
