"""Trending content: recent posts and news ranked by engagement."""
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from pulse.core.cache import TrendingCache
from pulse.core.concurrency import gather_or_cancel
from pulse.core.errors import StoreError, TrendingUnavailableError
from pulse.core.mixing import FeedMix
from pulse.core.time import as_utc, utcnow
from pulse.schemas.feed import TrendingResponse
from pulse.services.normalize import news_to_trending, normalize_rows, post_to_trending
from pulse.store.base import EntityKind, RecordFilter, RecordStore, SortKey, SortOrder

logger = logging.getLogger(__name__)

POST_ORDER = (
    SortKey("likesCount", SortOrder.DESC),
    SortKey("sharesCount", SortOrder.DESC),
    SortKey("createdAt", SortOrder.DESC),
)
NEWS_ORDER = (
    SortKey("viewsCount", SortOrder.DESC),
    SortKey("createdAt", SortOrder.DESC),
)


class TrendRanker:
    def __init__(
        self,
        store: RecordStore,
        mix: FeedMix,
        cache: TrendingCache | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.mix = mix
        self.cache = cache
        self.clock = clock

    async def compute_trending(self, limit: int = 10, timeframe: str = "7d") -> TrendingResponse:
        if self.cache is not None:
            cached = await self.cache.get(timeframe, limit)
            if cached is not None:
                return cached

        now = self.clock()
        since = now - timedelta(days=self.mix.window_days(timeframe))
        quotas = self.mix.trending_quotas(limit)
        where = RecordFilter(eligible=True, created_since=since)

        try:
            posts, news = await gather_or_cancel(
                self.store.find_many(EntityKind.POST, where, POST_ORDER, take=quotas.posts),
                self.store.find_many(EntityKind.NEWS, where, NEWS_ORDER, take=quotas.news),
            )
        except StoreError as exc:
            logger.exception("Error fetching trending content (limit=%s, timeframe=%r)", limit, timeframe)
            raise TrendingUnavailableError() from exc

        items = [
            *normalize_rows(posts, lambda p: post_to_trending(p, self.mix), "post"),
            *normalize_rows(news, lambda n: news_to_trending(n, self.mix), "news"),
        ]
        # list.sort is stable: equal scores keep store order (posts before news)
        items.sort(key=lambda item: item.engagement, reverse=True)

        response = TrendingResponse(data=items[:limit], timeframe=timeframe, generated_at=as_utc(now))
        if self.cache is not None:
            await self.cache.set(timeframe, limit, response)
        return response
