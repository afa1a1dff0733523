"""Build feed and trending items from store records."""
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic import ValidationError

from pulse.core.mixing import FeedMix
from pulse.schemas.category import CategorySummary
from pulse.schemas.comment import CommentPreview
from pulse.schemas.feed import (
    FeedNewsItem,
    FeedPostItem,
    FeedReelItem,
    TrendingNewsItem,
    TrendingPostItem,
)
from pulse.schemas.user import AuthorSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")

COMMENT_PREVIEW_SIZE = 3


def _author(record) -> AuthorSummary | None:
    return AuthorSummary.model_validate(record.author) if record.author else None


def _category(record) -> CategorySummary | None:
    return CategorySummary.model_validate(record.category) if record.category else None


def _comment_preview(post) -> list[CommentPreview]:
    newest = sorted(post.comments or [], key=lambda c: c.created_at, reverse=True)
    return [CommentPreview.model_validate(c) for c in newest[:COMMENT_PREVIEW_SIZE]]


def _post_fields(post) -> dict[str, Any]:
    return {
        "id": post.id,
        "content": post.content,
        "image_url": post.image_url,
        "author": _author(post),
        "category": _category(post),
        "tags": list(post.tags or []),
        "likes_count": post.likes_count or 0,
        "shares_count": post.shares_count or 0,
        "comments_count": post.comments_count or 0,
        "comments": _comment_preview(post),
        "is_pinned": bool(post.is_pinned),
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def _news_fields(news) -> dict[str, Any]:
    return {
        "id": news.id,
        "title": news.title,
        "description": news.description,
        "content": news.content,
        "image_url": news.image_url,
        "source_url": news.source_url,
        "category": news.category,
        "author": news.author,
        "tags": list(news.tags or []),
        "views_count": news.views_count or 0,
        "is_featured": bool(news.is_featured),
        "published_at": news.published_at,
        "created_at": news.created_at,
    }


def post_to_item(post) -> FeedPostItem:
    return FeedPostItem(**_post_fields(post))


def news_to_item(news) -> FeedNewsItem:
    return FeedNewsItem(**_news_fields(news))


def reel_to_item(reel) -> FeedReelItem:
    return FeedReelItem(
        id=reel.id,
        title=reel.title,
        description=reel.description,
        video_url=reel.video_url,
        thumbnail_url=reel.thumbnail_url,
        duration=reel.duration,
        author=_author(reel),
        category=_category(reel),
        tags=list(reel.tags or []),
        views_count=reel.views_count or 0,
        likes_count=reel.likes_count or 0,
        shares_count=reel.shares_count or 0,
        created_at=reel.created_at,
    )


def post_to_trending(post, mix: FeedMix) -> TrendingPostItem:
    fields = _post_fields(post)
    engagement = mix.post_engagement(fields["likes_count"], fields["shares_count"], fields["comments_count"])
    return TrendingPostItem(**fields, engagement=engagement)


def news_to_trending(news, mix: FeedMix) -> TrendingNewsItem:
    fields = _news_fields(news)
    return TrendingNewsItem(**fields, engagement=mix.news_engagement(fields["views_count"]))


def normalize_rows(rows: Iterable[Any], build: Callable[[Any], T], kind: str) -> list[T]:
    """Build an item per row. A malformed row is logged and skipped, the rest of the batch survives."""
    items: list[T] = []
    for row in rows:
        try:
            items.append(build(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed %s record %s: %d validation error(s)",
                kind,
                getattr(row, "id", None),
                exc.error_count(),
            )
    return items
