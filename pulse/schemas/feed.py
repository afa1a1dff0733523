"""Feed item schemas - unified feed (posts + news + reels) and trending.

Items are a tagged union on ``kind``. Engagement fields stay per kind
(likes/shares/comments for posts, views for news, views/likes/shares for
reels); consumers branch on ``kind`` to read them.
"""
from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import Field

from pulse.schemas.base import CamelModel
from pulse.schemas.category import CategorySummary
from pulse.schemas.comment import CommentPreview
from pulse.schemas.user import AuthorSummary


class FeedPostItem(CamelModel):
    kind: Literal["post"] = "post"
    id: UUID
    content: str
    image_url: str | None = None
    author: AuthorSummary | None = None
    category: CategorySummary | None = None
    tags: list[str] = Field(default_factory=list)
    likes_count: int = 0
    shares_count: int = 0
    comments_count: int = 0
    comments: list[CommentPreview] = Field(default_factory=list)  # newest first, at most 3
    is_pinned: bool = False
    created_at: datetime
    updated_at: datetime | None = None


class FeedNewsItem(CamelModel):
    kind: Literal["news"] = "news"
    id: UUID
    title: str
    description: str | None = None
    content: str | None = None
    image_url: str | None = None
    source_url: str | None = None
    category: str | None = None
    author: str | None = None
    tags: list[str] = Field(default_factory=list)
    views_count: int = 0
    is_featured: bool = False
    published_at: datetime | None = None
    created_at: datetime


class FeedReelItem(CamelModel):
    kind: Literal["reel"] = "reel"
    id: UUID
    title: str
    description: str | None = None
    video_url: str
    thumbnail_url: str | None = None
    duration: int
    author: AuthorSummary | None = None
    category: CategorySummary | None = None
    tags: list[str] = Field(default_factory=list)
    views_count: int = 0
    likes_count: int = 0
    shares_count: int = 0
    created_at: datetime


FeedItem = Annotated[
    Union[FeedPostItem, FeedNewsItem, FeedReelItem],
    Field(discriminator="kind"),
]


class TrendingPostItem(FeedPostItem):
    engagement: int


class TrendingNewsItem(FeedNewsItem):
    engagement: int


TrendingItem = Annotated[
    Union[TrendingPostItem, TrendingNewsItem],
    Field(discriminator="kind"),
]


class FeedPagination(CamelModel):
    page: int
    limit: int
    total: int  # items returned by this call, not a global count
    has_next_page: bool
    has_prev_page: bool


class FeedStats(CamelModel):
    posts_count: int = 0
    news_count: int = 0
    reels_count: int = 0


class FeedResponse(CamelModel):
    data: list[FeedItem]
    pagination: FeedPagination
    stats: FeedStats


class TrendingResponse(CamelModel):
    data: list[TrendingItem]
    timeframe: str
    generated_at: datetime
