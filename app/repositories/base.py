"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Repositories only flush; committing is left to the router that owns the
request, so a failed operation rolls back every write of that request.

Usage:
    class StoreRepository(BaseRepository[Store]):
        def __init__(self) -> None:
            super().__init__(Store)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리 (Generic repository bound to one model)."""

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(self, db: AsyncSession, record_id: UUID) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다 (Retrieve a single record by its UUID)."""
        result = await db.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_paginated(
        self,
        db: AsyncSession,
        query: Select,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """쿼리 결과의 한 페이지와 전체 건수를 반환합니다.

        Run ``query`` for one page and count every row it would return.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            query: 필터/정렬이 적용된 SELECT (Filtered and ordered SELECT)
            page: 1부터 시작하는 페이지 번호 (1-based page number)
            per_page: 페이지 크기 (Page size)

        Returns:
            tuple[Sequence[ModelType], int]: (페이지 항목, 전체 건수)
        """
        total: int = (
            await db.execute(select(func.count()).select_from(query.subquery()))
        ).scalar() or 0

        page_query: Select = query.offset((page - 1) * per_page).limit(per_page)
        items: Sequence[ModelType] = (await db.execute(page_query)).scalars().all()
        return items, total

    async def create(self, db: AsyncSession, obj_data: dict[str, Any]) -> ModelType:
        """새 레코드를 생성합니다 (Create and flush a new record)."""
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        record_id: UUID,
        update_data: dict[str, Any],
    ) -> ModelType | None:
        """전달된 필드만 갱신합니다 (None 값도 그대로 적용).

        Apply ``update_data`` to the record; returns None when it does not
        exist. Unknown keys are ignored.
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return None

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def exists(self, db: AsyncSession, filters: dict[str, Any]) -> bool:
        """동등 조건에 맞는 레코드 존재 여부 (Whether any row matches the equality filters)."""
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            query = query.where(getattr(self.model, column_name) == value)
        return ((await db.execute(query)).scalar() or 0) > 0

    async def count(self, db: AsyncSession) -> int:
        """전체 레코드 수 (Total number of rows)."""
        result = await db.execute(select(func.count()).select_from(self.model))
        return result.scalar() or 0
