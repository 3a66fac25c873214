"""매장 레포지토리 — 매장 CRUD 및 관련 쿼리.

Store Repository — CRUD and related queries for stores.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.pickup import PickupSchedule
from app.models.store import Store, StoreCapacity
from app.repositories.base import BaseRepository


class StoreRepository(BaseRepository[Store]):
    """매장 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the stores table.
    """

    def __init__(self) -> None:
        super().__init__(Store)

    async def list_all(self, db: AsyncSession) -> Sequence[Store]:
        """모든 매장을 이름순으로 조회합니다 (All stores ordered by name)."""
        query: Select = select(Store).order_by(Store.name)
        result = await db.execute(query)
        return result.scalars().all()

    async def get_by_user_id(self, db: AsyncSession, user_id: UUID) -> Store | None:
        """로그인 계정으로 매장을 조회합니다 (Store linked to a login account)."""
        result = await db.execute(select(Store).where(Store.user_id == user_id))
        return result.scalar_one_or_none()

    async def delete_with_children(self, db: AsyncSession, store: Store) -> None:
        """매장과 그 예약/수용량 행을 삭제합니다.

        Delete a store together with its pickups and per-date capacity rows.
        """
        await db.execute(delete(PickupSchedule).where(PickupSchedule.store_id == store.id))
        await db.execute(delete(StoreCapacity).where(StoreCapacity.store_id == store.id))
        await db.delete(store)
        await db.flush()


# 싱글턴 인스턴스: Singleton instance
store_repository: StoreRepository = StoreRepository()
