"""Trending ranking: time window, engagement order, quotas and caching."""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from conftest import hours_ago
from pulse.core.cache import TrendingCache
from pulse.core.errors import StoreError, TrendingUnavailableError
from pulse.core.mixing import FeedMix
from pulse.core.time import utcnow
from pulse.services.trending_service import TrendRanker
from pulse.store.base import EntityKind
from pulse.store.sql import SqlRecordStore


@pytest.fixture
def ranker(store):
    return TrendRanker(store, FeedMix())


async def test_24h_window_excludes_older_content(ranker, seed):
    fresh_post = await seed.posts(1, likes_count=1, created_at=hours_ago(2))
    await seed.posts(1, likes_count=100, created_at=hours_ago(72))
    fresh_news = await seed.news(1, views_count=1, created_at=hours_ago(5))
    await seed.news(1, views_count=100, created_at=hours_ago(48))

    response = await ranker.compute_trending(limit=10, timeframe="24h")

    cutoff = utcnow() - timedelta(hours=24)
    assert {item.id for item in response.data} == {fresh_post[0].id, fresh_news[0].id}
    assert all(item.created_at >= cutoff for item in response.data)
    assert response.timeframe == "24h"


async def test_window_includes_an_item_created_exactly_at_the_cutoff(store, seed):
    now = utcnow().replace(microsecond=0)
    (at_cutoff,) = await seed.posts(1, created_at=now - timedelta(days=1))
    await seed.posts(1, created_at=now - timedelta(days=1, seconds=1))
    ranker = TrendRanker(store, FeedMix(), clock=lambda: now)

    response = await ranker.compute_trending(limit=10, timeframe="24h")

    assert [item.id for item in response.data] == [at_cutoff.id]
    assert response.generated_at.replace(tzinfo=None) == now


async def test_unknown_timeframe_uses_30_days_and_is_echoed(ranker, seed):
    recent = await seed.posts(1, created_at=hours_ago(24 * 20))
    await seed.posts(1, created_at=hours_ago(24 * 40))

    response = await ranker.compute_trending(limit=10, timeframe="1y")

    assert [item.id for item in response.data] == [recent[0].id]
    assert response.timeframe == "1y"


async def test_items_ordered_by_engagement(ranker, seed):
    (low,) = await seed.posts(1, likes_count=2, created_at=hours_ago(1))
    (high,) = await seed.posts(1, likes_count=9, created_at=hours_ago(2))
    (quiet,) = await seed.news(1, views_count=3, created_at=hours_ago(1))
    (loud,) = await seed.news(1, views_count=20, created_at=hours_ago(3))
    await seed.comments(low, 4)

    response = await ranker.compute_trending(limit=10)

    scores = [item.engagement for item in response.data]
    assert scores == sorted(scores, reverse=True)
    by_id = {item.id: item for item in response.data}
    assert by_id[low.id].engagement == 2 + 4
    assert by_id[low.id].comments_count == 4
    assert by_id[loud.id].engagement == 20
    assert [item.id for item in response.data] == [loud.id, high.id, low.id, quiet.id]


async def test_limit_splits_60_40_between_posts_and_news(ranker, seed):
    await seed.posts(10, likes_count=5)
    await seed.news(10, views_count=5)

    response = await ranker.compute_trending(limit=10)

    kinds = [item.kind for item in response.data]
    assert kinds.count("post") == 6
    assert kinds.count("news") == 4


async def test_ineligible_content_never_trends(ranker, seed):
    await seed.posts(2, likes_count=50, is_public=False)
    await seed.news(2, views_count=50, is_published=False)
    visible = await seed.posts(1, likes_count=1)

    response = await ranker.compute_trending(limit=10)

    assert [item.id for item in response.data] == [visible[0].id]


async def test_ties_keep_store_order_across_calls(ranker, seed):
    newer = await seed.posts(1, likes_count=5, created_at=hours_ago(1))
    older = await seed.posts(1, likes_count=5, created_at=hours_ago(2))
    news = await seed.news(1, views_count=5, created_at=hours_ago(0.5))

    first = await ranker.compute_trending(limit=10)
    second = await ranker.compute_trending(limit=10)

    expected = [newer[0].id, older[0].id, news[0].id]
    assert [item.id for item in first.data] == expected
    assert [item.id for item in second.data] == expected


async def test_store_failure_fails_the_request(session_maker):
    class BrokenStore(SqlRecordStore):
        async def find_many(self, kind, *args, **kwargs):
            if kind is EntityKind.POST:
                raise StoreError("find_many on post failed")
            return await super().find_many(kind, *args, **kwargs)

    ranker = TrendRanker(BrokenStore(session_maker), FeedMix())

    with pytest.raises(TrendingUnavailableError):
        await ranker.compute_trending()


class TestTrendingCache:
    async def test_miss_computes_and_stores_with_ttl(self, store, seed):
        await seed.posts(2, likes_count=3)
        redis = AsyncMock()
        redis.get.return_value = None
        ranker = TrendRanker(store, FeedMix(), cache=TrendingCache(redis, ttl_seconds=120))

        response = await ranker.compute_trending(limit=10, timeframe="7d")

        assert len(response.data) == 2
        redis.get.assert_awaited_once_with("trending:7d:10")
        key, payload = redis.set.await_args.args
        assert key == "trending:7d:10"
        assert redis.set.await_args.kwargs == {"ex": 120}
        assert '"generatedAt"' in payload

    async def test_hit_skips_the_store(self, store, seed, session_maker):
        await seed.posts(2, likes_count=3)
        writer = AsyncMock()
        writer.get.return_value = None
        fresh = await TrendRanker(store, FeedMix(), cache=TrendingCache(writer, 60)).compute_trending()
        cached_payload = writer.set.await_args.args[1]

        class UnreachableStore(SqlRecordStore):
            async def find_many(self, *args, **kwargs):
                raise AssertionError("store should not be read on a cache hit")

        reader = AsyncMock()
        reader.get.return_value = cached_payload
        ranker = TrendRanker(UnreachableStore(session_maker), FeedMix(), cache=TrendingCache(reader, 60))

        response = await ranker.compute_trending()

        assert [item.id for item in response.data] == [item.id for item in fresh.data]
        assert response.generated_at == fresh.generated_at
        reader.set.assert_not_awaited()

    async def test_redis_outage_is_a_cache_miss(self, store, seed):
        await seed.posts(1)
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("connection refused")
        redis.set.side_effect = RedisConnectionError("connection refused")
        ranker = TrendRanker(store, FeedMix(), cache=TrendingCache(redis, 60))

        response = await ranker.compute_trending()

        assert len(response.data) == 1

    async def test_unreadable_entry_is_discarded(self, store, seed):
        await seed.posts(1)
        redis = AsyncMock()
        redis.get.return_value = "{not json"
        ranker = TrendRanker(store, FeedMix(), cache=TrendingCache(redis, 60))

        response = await ranker.compute_trending()

        assert len(response.data) == 1
        redis.set.assert_awaited_once()
