"""Error types shared by the store, the feed components and the API layer.

Every error carries a stable ``code`` and an HTTP ``status_code`` so the
exception handler in ``pulse.main`` can render a structured payload without
knowing which component raised it.
"""
from fastapi import status


class PulseError(Exception):
    code: str = "internal_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, code: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if code:
            self.code = code


class StoreError(PulseError):
    """Raised by a record store when a read or write could not be completed."""

    code = "store_error"
    message = "Record store operation failed"


class InvalidFieldError(StoreError):
    """Unknown field name for the entity being queried (sort, distinct or increment)."""

    code = "invalid_field"
    message = "Unknown field"


class NotFoundError(PulseError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


class FeedUnavailableError(PulseError):
    code = "feed_unavailable"
    message = "Failed to fetch pulse feed"


class TrendingUnavailableError(PulseError):
    code = "trending_unavailable"
    message = "Failed to fetch trending content"


class CategoriesUnavailableError(PulseError):
    code = "categories_unavailable"
    message = "Failed to fetch categories"


class NewsUnavailableError(PulseError):
    code = "news_unavailable"
    message = "Failed to fetch news topics"


class ReelsUnavailableError(PulseError):
    code = "reels_unavailable"
    message = "Failed to fetch reels"
