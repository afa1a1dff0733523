"""Record store interface consumed by the feed components.

The components never touch a session or a model class directly; they ask the
store for records of an ``EntityKind`` through filters, sort keys and
skip/take pagination.
"""
import enum
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID


class EntityKind(str, enum.Enum):
    POST = "post"
    NEWS = "news"
    REEL = "reel"
    POST_CATEGORY = "post_category"
    REEL_CATEGORY = "reel_category"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        """Anything other than ``asc`` (case-insensitive) sorts descending."""
        if value and value.strip().lower() == "asc":
            return cls.ASC
        return cls.DESC


@dataclass(frozen=True)
class SortKey:
    field: str
    order: SortOrder = SortOrder.DESC


@dataclass(frozen=True)
class RecordFilter:
    """Conditions combined with AND. ``None`` means "do not filter on this"."""

    eligible: bool | None = None  # public posts/reels, published news
    category: str | None = None  # case-insensitive substring of the record's category
    category_equals: str | None = None  # exact match on a free-text category column
    category_id: UUID | None = None
    author_id: UUID | None = None
    created_since: datetime | None = None  # inclusive
    featured: bool | None = None
    search: str | None = None  # substring of title/description/content


class RecordStore(Protocol):
    def has_field(self, kind: EntityKind, field: str) -> bool:
        ...

    async def find_many(
        self,
        kind: EntityKind,
        where: RecordFilter | None = None,
        order_by: Sequence[SortKey] = (),
        skip: int = 0,
        take: int | None = None,
    ) -> list[Any]:
        ...

    async def find_one(self, kind: EntityKind, record_id: UUID) -> Any | None:
        ...

    async def count(self, kind: EntityKind, where: RecordFilter | None = None) -> int:
        ...

    async def count_by(self, kind: EntityKind, field: str, where: RecordFilter | None = None) -> dict[Any, int]:
        """Record counts grouped by ``field`` in one round trip. Empty groups are absent."""
        ...

    async def find_distinct(self, kind: EntityKind, field: str, where: RecordFilter | None = None) -> list[Any]:
        ...

    async def increment_field(self, kind: EntityKind, record_id: UUID, field: str, by: int = 1) -> None:
        """Atomic ``field = field + by`` at the store."""
        ...
