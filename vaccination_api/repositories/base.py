"""
Generic async repository over one mapped model.

Concrete repositories set ``model`` and build their own lookups on top of
``find_unique`` / ``find_many`` / ``count``. Filters are plain mappings of
attribute name to value; ``None`` matches NULL.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vaccination_api.core.exceptions import NotFoundError
from vaccination_api.core.timeutils import utcnow
from vaccination_api.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

Filters = Mapping[str, Any]

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelT]):
    model: ClassVar[type[Base]]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _where(self, filters: Filters | None) -> list[Any]:
        clauses = []
        for field, value in (filters or {}).items():
            column = getattr(self.model, field)
            clauses.append(column.is_(None) if value is None else column == value)
        return clauses

    # ── Reads ───────────────────────────────────────────────────────
    async def find_by_id(self, record_id: Any) -> ModelT | None:
        return await self.session.get(self.model, record_id)  # type: ignore[return-value]

    async def find_all(self) -> list[ModelT]:
        result = await self.session.execute(select(self.model))
        return list(result.scalars().all())

    async def find_unique(self, filters: Filters) -> ModelT | None:
        result = await self.session.execute(select(self.model).where(*self._where(filters)))
        return result.scalar_one_or_none()

    async def find_many(self, filters: Filters | None = None) -> list[ModelT]:
        result = await self.session.execute(select(self.model).where(*self._where(filters)))
        return list(result.scalars().all())

    async def count(self, filters: Filters | None = None) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._where(filters))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def exists(self, filters: Filters) -> bool:
        return await self.count(filters) > 0

    # ── Writes ──────────────────────────────────────────────────────
    async def _commit(self, instance: ModelT | None = None) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        if instance is not None:
            await self.session.refresh(instance)

    async def _get_or_raise(self, record_id: Any) -> ModelT:
        instance = await self.find_by_id(record_id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} {record_id} not found")
        return instance

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        instance = self.model(**data)
        self.session.add(instance)
        await self._commit(instance)  # type: ignore[arg-type]
        return instance  # type: ignore[return-value]

    async def update(self, record_id: Any, data: Mapping[str, Any]) -> ModelT:
        instance = await self._get_or_raise(record_id)
        for field, value in data.items():
            setattr(instance, field, value)
        await self._commit(instance)
        return instance

    async def delete(self, record_id: Any) -> ModelT:
        instance = await self._get_or_raise(record_id)
        await self.session.delete(instance)
        await self._commit()
        logger.info("Hard-deleted %s %s", self.model.__name__, record_id)
        return instance

    async def soft_delete(self, record_id: Any) -> ModelT:
        return await self.update(record_id, {"deleted_at": utcnow(), "is_active": False})
