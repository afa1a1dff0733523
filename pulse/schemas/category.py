"""Pydantic schemas for post/reel categories and the category listing."""
from uuid import UUID

from pulse.schemas.base import CamelModel


class CategorySummary(CamelModel):
    id: UUID
    name: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None


class PostCategoryResponse(CategorySummary):
    posts_count: int = 0


class ReelCategoryResponse(CategorySummary):
    reels_count: int = 0


class CategoriesResponse(CamelModel):
    post_categories: list[PostCategoryResponse]
    news_categories: list[str]
    reel_categories: list[ReelCategoryResponse]
