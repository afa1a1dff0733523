"""Unified feed composition: posts, news and reels mixed by fixed quotas."""
import logging

from pulse.core.concurrency import gather_or_cancel
from pulse.core.errors import FeedUnavailableError, StoreError
from pulse.core.mixing import FeedMix
from pulse.schemas.feed import FeedPagination, FeedResponse, FeedStats
from pulse.services.normalize import news_to_item, normalize_rows, post_to_item, reel_to_item
from pulse.store.base import EntityKind, RecordFilter, RecordStore, SortKey, SortOrder

logger = logging.getLogger(__name__)

FEED_SOURCES = (EntityKind.POST, EntityKind.NEWS, EntityKind.REEL)


class FeedComposer:
    def __init__(self, store: RecordStore, mix: FeedMix):
        self.store = store
        self.mix = mix

    async def compose_feed(
        self,
        page: int = 1,
        page_size: int = 20,
        category: str | None = None,
        sort_field: str = "createdAt",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> FeedResponse:
        """Draw each source's quota, then re-sort the merged page by ``createdAt``.

        ``sort_field`` orders each source query that has the field; the other
        sources fall back to ``createdAt``. A field no source knows is passed
        through and rejected by the store. The final order across kinds always
        follows ``createdAt`` in ``sort_order``. Each source pages through its
        own records, skipping ``(page - 1) * quota``.
        """
        quotas = self.mix.feed_quotas(page_size)
        where = RecordFilter(eligible=True, category=category or None)
        sortable = {kind for kind in FEED_SOURCES if self.store.has_field(kind, sort_field)}

        def read(kind: EntityKind, quota: int):
            field = sort_field if kind in sortable or not sortable else "createdAt"
            order_by = [SortKey(field, sort_order)]
            return self.store.find_many(kind, where, order_by, skip=(page - 1) * quota, take=quota)

        try:
            posts, news, reels = await gather_or_cancel(
                read(EntityKind.POST, quotas.posts),
                read(EntityKind.NEWS, quotas.news),
                read(EntityKind.REEL, quotas.reels),
            )
        except StoreError as exc:
            logger.exception(
                "Error fetching pulse feed (page=%s, limit=%s, category=%r, sortBy=%s, sortOrder=%s)",
                page,
                page_size,
                category,
                sort_field,
                sort_order.value,
            )
            raise FeedUnavailableError() from exc

        post_items = normalize_rows(posts, post_to_item, "post")
        news_items = normalize_rows(news, news_to_item, "news")
        reel_items = normalize_rows(reels, reel_to_item, "reel")

        items = [*post_items, *news_items, *reel_items]
        items.sort(key=lambda item: item.created_at, reverse=sort_order is SortOrder.DESC)

        return FeedResponse(
            data=items,
            pagination=FeedPagination(
                page=page,
                limit=page_size,
                total=len(items),
                has_next_page=len(items) == page_size,
                has_prev_page=page > 1,
            ),
            stats=FeedStats(
                posts_count=len(post_items),
                news_count=len(news_items),
                reels_count=len(reel_items),
            ),
        )
