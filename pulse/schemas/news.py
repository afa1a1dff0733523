"""Pydantic schemas for news topics."""
from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from pulse.schemas.base import CamelModel, PagePagination


class NewsTopicResponse(CamelModel):
    id: UUID
    title: str
    description: str | None = None
    content: str
    image_url: str | None = None
    source_url: str | None = None
    category: str | None = None
    author: str | None = None
    tags: list[str] = Field(default_factory=list)
    views_count: int = 0
    is_featured: bool = False
    is_published: bool = True
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        return value or []


class NewsListResponse(CamelModel):
    data: list[NewsTopicResponse]
    pagination: PagePagination
