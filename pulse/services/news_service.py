"""News topic reads: listing, featured, categories and the single-item fetch."""
import logging
from uuid import UUID

from pulse.core.concurrency import gather_or_cancel
from pulse.core.errors import NewsUnavailableError, NotFoundError, StoreError
from pulse.schemas.base import PagePagination
from pulse.schemas.news import NewsListResponse, NewsTopicResponse
from pulse.store.base import EntityKind, RecordFilter, RecordStore, SortKey, SortOrder

logger = logging.getLogger(__name__)

NEWEST_FIRST = (SortKey("createdAt", SortOrder.DESC),)


async def list_news(
    store: RecordStore,
    page: int = 1,
    limit: int = 10,
    category: str | None = None,
    featured: bool | None = None,
    search: str | None = None,
    sort_field: str = "createdAt",
    sort_order: SortOrder = SortOrder.DESC,
) -> NewsListResponse:
    where = RecordFilter(eligible=True, category_equals=category or None, featured=featured, search=search or None)
    try:
        rows, total = await gather_or_cancel(
            store.find_many(EntityKind.NEWS, where, [SortKey(sort_field, sort_order)], skip=(page - 1) * limit, take=limit),
            store.count(EntityKind.NEWS, where),
        )
    except StoreError as exc:
        logger.exception("Error fetching news topics (page=%s, limit=%s, category=%r)", page, limit, category)
        raise NewsUnavailableError() from exc

    return NewsListResponse(
        data=[NewsTopicResponse.model_validate(row) for row in rows],
        pagination=PagePagination.build(page, limit, total),
    )


async def featured_news(store: RecordStore, limit: int = 5) -> list[NewsTopicResponse]:
    try:
        rows = await store.find_many(
            EntityKind.NEWS, RecordFilter(eligible=True, featured=True), NEWEST_FIRST, take=limit
        )
    except StoreError as exc:
        logger.exception("Error fetching featured news (limit=%s)", limit)
        raise NewsUnavailableError("Failed to fetch featured news") from exc
    return [NewsTopicResponse.model_validate(row) for row in rows]


async def news_categories(store: RecordStore) -> list[str]:
    try:
        values = await store.find_distinct(EntityKind.NEWS, "category", RecordFilter(eligible=True))
    except StoreError as exc:
        logger.exception("Error fetching news categories")
        raise NewsUnavailableError("Failed to fetch categories") from exc
    return sorted(v for v in values if v)


async def get_news(store: RecordStore, news_id: UUID) -> NewsTopicResponse:
    """Fetch one news topic, then count the read.

    The returned ``viewsCount`` is the value before this read. A missing topic
    is a 404 and nothing is written. Feed and trending inclusion never count.
    """
    try:
        row = await store.find_one(EntityKind.NEWS, news_id)
        if row is None:
            raise NotFoundError("News topic not found")
        await store.increment_field(EntityKind.NEWS, news_id, "viewsCount", 1)
    except StoreError as exc:
        logger.exception("Error fetching news topic %s", news_id)
        raise NewsUnavailableError("Failed to fetch news topic") from exc
    return NewsTopicResponse.model_validate(row)
