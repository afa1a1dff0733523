"""Unified feed composition against the SQLAlchemy store."""
import asyncio

import pytest

from pulse.core.errors import FeedUnavailableError, InvalidFieldError, StoreError
from pulse.core.mixing import FeedMix
from pulse.models import PostCategory, ReelCategory
from pulse.services.feed_service import FeedComposer
from pulse.store.base import EntityKind, SortOrder
from pulse.store.sql import SqlRecordStore


@pytest.fixture
def composer(store):
    return FeedComposer(store, FeedMix())


def kinds(response):
    return [item.kind for item in response.data]


async def test_mixing_ratio_with_abundant_data(composer, seed):
    await seed.posts(20)
    await seed.news(10)
    await seed.reels(5)

    response = await composer.compose_feed(page_size=20)

    assert kinds(response).count("post") == 12
    assert kinds(response).count("news") == 6
    assert kinds(response).count("reel") == 2
    assert response.stats.model_dump() == {"posts_count": 12, "news_count": 6, "reels_count": 2}
    assert response.pagination.total == 20
    assert response.pagination.has_next_page is True
    assert response.pagination.has_prev_page is False


async def test_tiny_page_floors_news_and_reels_to_zero(composer, seed):
    await seed.posts(5)
    await seed.news(5)
    await seed.reels(5)

    response = await composer.compose_feed(page_size=2)

    assert kinds(response) == ["post"]
    assert response.stats.news_count == 0
    assert response.stats.reels_count == 0
    assert response.pagination.total == 1
    assert response.pagination.has_next_page is False


@pytest.mark.parametrize("order", [SortOrder.DESC, SortOrder.ASC])
async def test_merged_items_are_globally_sorted_by_created_at(composer, seed, order):
    # Interleave creation times across kinds
    await seed.posts(12, start=0, step=3)
    await seed.news(6, start=1, step=3)
    await seed.reels(4, start=2, step=3)

    response = await composer.compose_feed(page_size=20, sort_order=order)

    stamps = [item.created_at for item in response.data]
    assert len(set(kinds(response))) == 3
    if order is SortOrder.DESC:
        assert all(a >= b for a, b in zip(stamps, stamps[1:]))
    else:
        assert all(a <= b for a, b in zip(stamps, stamps[1:]))


async def test_only_public_and_published_records_are_included(composer, seed):
    public_posts = await seed.posts(3, start=10)
    hidden_posts = await seed.posts(3, start=0, is_public=False)
    published = await seed.news(2, start=10)
    drafts = await seed.news(2, start=0, is_published=False)
    public_reels = await seed.reels(1, start=10)
    private_reels = await seed.reels(1, start=0, is_public=False)

    response = await composer.compose_feed(page_size=20)

    ids = {item.id for item in response.data}
    assert ids == {r.id for r in public_posts + published + public_reels}
    assert ids.isdisjoint({r.id for r in hidden_posts + drafts + private_reels})


async def test_category_matching_nothing_returns_empty_page(composer, seed):
    await seed.posts(5)
    await seed.news(5, category="politics")
    await seed.reels(5)

    response = await composer.compose_feed(page_size=20, category="astronomy")

    assert response.data == []
    assert response.stats.model_dump() == {"posts_count": 0, "news_count": 0, "reels_count": 0}
    assert response.pagination.total == 0


async def test_category_is_a_case_insensitive_substring_per_source(composer, seed):
    economy, culture = await seed.add(PostCategory(name="Economy"), PostCategory(name="Culture"))
    (reel_economy,) = await seed.add(ReelCategory(name="Economy Explained"))
    matching_posts = await seed.posts(2, category_id=economy.id)
    await seed.posts(2, category_id=culture.id)
    await seed.posts(2)
    matching_news = await seed.news(2, category="economy & trade")
    await seed.news(2, category="sports")
    matching_reels = await seed.reels(1, category_id=reel_economy.id)

    response = await composer.compose_feed(page_size=20, category="ECONOMY")

    assert {item.id for item in response.data} == {r.id for r in matching_posts + matching_news + matching_reels}
    post_item = next(item for item in response.data if item.kind == "post")
    assert post_item.category.name == "Economy"


async def test_quotas_are_not_redistributed_to_a_lone_source(composer, seed):
    await seed.news(10)

    response = await composer.compose_feed(page_size=10)

    assert kinds(response) == ["news"] * 3
    assert response.stats.model_dump() == {"posts_count": 0, "news_count": 3, "reels_count": 0}


async def test_empty_store(composer):
    response = await composer.compose_feed()

    assert response.data == []
    assert response.pagination.total == 0
    assert response.pagination.has_next_page is False
    assert response.stats.model_dump() == {"posts_count": 0, "news_count": 0, "reels_count": 0}


async def test_each_source_pages_by_its_own_quota(composer, seed):
    await seed.posts(12)

    first = await composer.compose_feed(page=1, page_size=10)
    second = await composer.compose_feed(page=2, page_size=10)

    assert first.stats.posts_count == 6
    assert second.stats.posts_count == 6
    assert {i.id for i in first.data}.isdisjoint({i.id for i in second.data})
    assert second.pagination.has_prev_page is True
    assert max(i.created_at for i in second.data) <= min(i.created_at for i in first.data)


async def test_sort_field_orders_each_source_query(composer, seed):
    await seed.posts(1, start=0, likes_count=1)
    popular = await seed.posts(1, start=30, likes_count=50)
    await seed.posts(1, start=10, likes_count=5)

    response = await composer.compose_feed(page_size=2, sort_field="likesCount")

    # posts quota is 1: the most liked post wins even though it is the oldest
    assert [item.id for item in response.data] == [popular[0].id]


async def test_comment_count_is_derived_from_comments(composer, seed):
    (post,) = await seed.posts(1)
    await seed.comments(post, 3)

    response = await composer.compose_feed(page_size=2)

    assert response.data[0].comments_count == 3


async def test_posts_carry_a_preview_of_the_newest_comments(composer, seed):
    (post,) = await seed.posts(1)
    comments = await seed.comments(post, 5)

    response = await composer.compose_feed(page_size=2)

    (item,) = response.data
    assert item.comments_count == 5
    assert [c.id for c in item.comments] == [c.id for c in comments[:3]]
    assert item.comments[0].author.username == "ana"


async def test_unknown_sort_field_fails_the_request(composer, seed):
    await seed.posts(3)

    with pytest.raises(FeedUnavailableError) as excinfo:
        await composer.compose_feed(sort_field="bogus")

    assert isinstance(excinfo.value.__cause__, InvalidFieldError)


async def test_sources_without_the_sort_field_fall_back_to_created_at(composer, seed):
    # news topics have no like counter
    await seed.posts(6, start=0, likes_count=1)
    (liked_post,) = await seed.posts(1, start=60, likes_count=40)
    newest_news = await seed.news(3, start=0)
    await seed.news(3, start=30)
    await seed.reels(1, start=0, likes_count=0)
    (liked_reel,) = await seed.reels(1, start=60, likes_count=9)

    response = await composer.compose_feed(page_size=10, sort_field="likesCount")

    posts = [item for item in response.data if item.kind == "post"]
    news = [item for item in response.data if item.kind == "news"]
    reels = [item for item in response.data if item.kind == "reel"]
    assert liked_post.id in {item.id for item in posts}
    assert {item.id for item in news} == {r.id for r in newest_news}
    assert [item.id for item in reels] == [liked_reel.id]


class BrokenNewsStore(SqlRecordStore):
    """News reads fail immediately; post reads block until cancelled."""

    post_read_cancelled = False

    async def find_many(self, kind, *args, **kwargs):
        if kind is EntityKind.NEWS:
            raise StoreError("find_many on news failed")
        if kind is EntityKind.POST:
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                self.post_read_cancelled = True
                raise
        return await super().find_many(kind, *args, **kwargs)


async def test_one_failing_source_fails_fast_and_cancels_the_others(session_maker, seed):
    await seed.posts(3)
    store = BrokenNewsStore(session_maker)
    composer = FeedComposer(store, FeedMix())

    with pytest.raises(FeedUnavailableError) as excinfo:
        await asyncio.wait_for(composer.compose_feed(), timeout=5)

    assert excinfo.value.code == "feed_unavailable"
    assert store.post_read_cancelled is True
