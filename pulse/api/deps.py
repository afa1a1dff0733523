"""API dependencies: record store, feed components, trending cache."""
from fastapi import Depends, Request

from pulse.core.cache import TrendingCache
from pulse.core.mixing import FeedMix
from pulse.db.session import async_session_maker
from pulse.services.category_service import CategoryAggregator
from pulse.services.feed_service import FeedComposer
from pulse.services.trending_service import TrendRanker
from pulse.store.base import RecordStore
from pulse.store.sql import SqlRecordStore


def get_record_store() -> RecordStore:
    return SqlRecordStore(async_session_maker)


def get_feed_mix() -> FeedMix:
    return FeedMix.from_settings()


def get_trending_cache(request: Request) -> TrendingCache | None:
    """Cache built by the lifespan; absent when disabled or when the lifespan did not run."""
    return getattr(request.app.state, "trending_cache", None)


def get_feed_composer(
    store: RecordStore = Depends(get_record_store),
    mix: FeedMix = Depends(get_feed_mix),
) -> FeedComposer:
    return FeedComposer(store, mix)


def get_trend_ranker(
    store: RecordStore = Depends(get_record_store),
    mix: FeedMix = Depends(get_feed_mix),
    cache: TrendingCache | None = Depends(get_trending_cache),
) -> TrendRanker:
    return TrendRanker(store, mix, cache=cache)


def get_category_aggregator(store: RecordStore = Depends(get_record_store)) -> CategoryAggregator:
    return CategoryAggregator(store)
