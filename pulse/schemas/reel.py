"""Pydantic schemas for reels."""
from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from pulse.schemas.base import CamelModel, PagePagination
from pulse.schemas.category import CategorySummary
from pulse.schemas.user import AuthorSummary


class ReelResponse(CamelModel):
    id: UUID
    title: str
    description: str | None = None
    video_url: str
    thumbnail_url: str | None = None
    duration: int
    author_id: UUID
    author: AuthorSummary | None = None
    category: CategorySummary | None = None
    tags: list[str] = Field(default_factory=list)
    views_count: int = 0
    likes_count: int = 0
    shares_count: int = 0
    is_public: bool = True
    created_at: datetime
    updated_at: datetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        return value or []


class ReelListResponse(CamelModel):
    data: list[ReelResponse]
    pagination: PagePagination
