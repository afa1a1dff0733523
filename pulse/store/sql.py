"""SQLAlchemy implementation of the record store.

Each call opens its own session from the session maker so that reads issued
concurrently by one request never share an ``AsyncSession``.
"""
import logging
import re
from collections.abc import Callable, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import Result, func, inspect, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from pulse.core.errors import InvalidFieldError, StoreError
from pulse.models import Comment, NewsTopic, Post, PostCategory, Reel, ReelCategory
from pulse.store.base import EntityKind, RecordFilter, SortKey, SortOrder

logger = logging.getLogger(__name__)

MODELS: dict[EntityKind, type] = {
    EntityKind.POST: Post,
    EntityKind.NEWS: NewsTopic,
    EntityKind.REEL: Reel,
    EntityKind.POST_CATEGORY: PostCategory,
    EntityKind.REEL_CATEGORY: ReelCategory,
}

# Relationships loaded with every record so items can be built after the session closes
EAGER_RELATIONSHIPS = ("author", "category")
SEARCHABLE_COLUMNS = ("title", "description", "content")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(name: str) -> str:
    """``likesCount`` -> ``likes_count``; snake_case passes through."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class SqlRecordStore:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    def has_field(self, kind: EntityKind, field: str) -> bool:
        return to_snake(field) in inspect(MODELS[kind]).column_attrs

    def _column(self, kind: EntityKind, field: str):
        if not self.has_field(kind, field):
            raise InvalidFieldError(f"Unknown field '{field}' for {kind.value}")
        return getattr(MODELS[kind], to_snake(field))

    def _conditions(self, kind: EntityKind, where: RecordFilter | None) -> list:
        if where is None:
            return []
        model = MODELS[kind]
        mapper = inspect(model)
        columns = mapper.column_attrs
        conditions = []

        if where.eligible is not None:
            if "is_public" in columns:
                conditions.append(model.is_public == where.eligible)
            elif "is_published" in columns:
                conditions.append(model.is_published == where.eligible)

        if where.category:
            if "category" in mapper.relationships:
                target = mapper.relationships["category"].mapper.class_
                conditions.append(model.category.has(target.name.icontains(where.category, autoescape=True)))
            elif "category" in columns:
                conditions.append(model.category.icontains(where.category, autoescape=True))
            else:
                raise InvalidFieldError(f"Unknown field 'category' for {kind.value}")

        if where.category_equals is not None:
            conditions.append(self._column(kind, "category") == where.category_equals)

        if where.category_id is not None:
            conditions.append(self._column(kind, "category_id") == where.category_id)

        if where.author_id is not None:
            conditions.append(self._column(kind, "author_id") == where.author_id)

        if where.created_since is not None:
            conditions.append(self._column(kind, "created_at") >= where.created_since)

        if where.featured is not None:
            conditions.append(self._column(kind, "is_featured") == where.featured)

        if where.search:
            searchable = [getattr(model, c) for c in SEARCHABLE_COLUMNS if c in columns]
            conditions.append(or_(*(c.icontains(where.search, autoescape=True) for c in searchable)))

        return conditions

    def _eager_options(self, kind: EntityKind) -> list:
        model = MODELS[kind]
        relationships = inspect(model).relationships
        options = [selectinload(getattr(model, rel)) for rel in EAGER_RELATIONSHIPS if rel in relationships]
        if model is Post:
            # Comment preview; the normalizer keeps the newest few
            options.append(selectinload(Post.comments).selectinload(Comment.author))
        return options

    async def _execute(self, stmt, operation: str, kind: EntityKind, extract: Callable[[Result], Any]) -> Any:
        logger.debug("%s %s", operation, kind.value)
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                return extract(result)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Store %s on %s failed: %s", operation, kind.value, exc)
            raise StoreError(f"{operation} on {kind.value} failed") from exc

    async def find_many(
        self,
        kind: EntityKind,
        where: RecordFilter | None = None,
        order_by: Sequence[SortKey] = (),
        skip: int = 0,
        take: int | None = None,
    ) -> list[Any]:
        model = MODELS[kind]
        stmt = select(model).where(*self._conditions(kind, where))
        for key in order_by:
            column = self._column(kind, key.field)
            stmt = stmt.order_by(column.asc() if key.order is SortOrder.ASC else column.desc())
        # Primary key last so equal sort keys come back in the same order every call
        stmt = stmt.order_by(model.id)
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        stmt = stmt.options(*self._eager_options(kind))
        return await self._execute(stmt, "find_many", kind, lambda r: list(r.scalars().all()))

    async def find_one(self, kind: EntityKind, record_id: UUID) -> Any | None:
        model = MODELS[kind]
        stmt = select(model).where(model.id == record_id).options(*self._eager_options(kind))
        return await self._execute(stmt, "find_one", kind, lambda r: r.scalar_one_or_none())

    async def count(self, kind: EntityKind, where: RecordFilter | None = None) -> int:
        model = MODELS[kind]
        stmt = select(func.count()).select_from(model).where(*self._conditions(kind, where))
        return await self._execute(stmt, "count", kind, lambda r: int(r.scalar_one()))

    async def count_by(self, kind: EntityKind, field: str, where: RecordFilter | None = None) -> dict[Any, int]:
        model = MODELS[kind]
        column = self._column(kind, field)
        stmt = (
            select(column, func.count(model.id))
            .where(*self._conditions(kind, where))
            .group_by(column)
        )
        return await self._execute(stmt, "count_by", kind, lambda r: {value: int(n) for value, n in r.all()})

    async def find_distinct(self, kind: EntityKind, field: str, where: RecordFilter | None = None) -> list[Any]:
        column = self._column(kind, field)
        stmt = select(column).where(*self._conditions(kind, where)).distinct()
        return await self._execute(stmt, "find_distinct", kind, lambda r: list(r.scalars().all()))

    async def increment_field(self, kind: EntityKind, record_id: UUID, field: str, by: int = 1) -> None:
        model = MODELS[kind]
        column = self._column(kind, field)
        stmt = (
            update(model)
            .where(model.id == record_id)
            .values({column.key: column + by})
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._session_maker.begin() as session:
                await session.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Store increment_field %s.%s failed: %s", kind.value, field, exc)
            raise StoreError(f"increment_field on {kind.value} failed") from exc
