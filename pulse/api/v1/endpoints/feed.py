"""Unified pulse feed endpoints: feed, trending, categories."""
from fastapi import APIRouter, Depends, Query

from pulse.api.deps import get_category_aggregator, get_feed_composer, get_trend_ranker
from pulse.api.params import positive_int
from pulse.core.config import settings
from pulse.schemas.category import CategoriesResponse
from pulse.schemas.feed import FeedResponse, TrendingResponse
from pulse.services.category_service import CategoryAggregator
from pulse.services.feed_service import FeedComposer
from pulse.services.trending_service import TrendRanker
from pulse.store.base import SortOrder

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=FeedResponse)
async def get_feed(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    category: str | None = Query(None),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str | None = Query("desc", alias="sortOrder"),
    composer: FeedComposer = Depends(get_feed_composer),
):
    return await composer.compose_feed(
        page=positive_int(page, 1),
        page_size=positive_int(limit, settings.FEED_DEFAULT_PAGE_SIZE, settings.FEED_MAX_PAGE_SIZE),
        category=category.strip() if category else None,
        sort_field=sort_by or "createdAt",
        sort_order=SortOrder.parse(sort_order),
    )


@router.get("/trending", response_model=TrendingResponse)
async def get_trending(
    limit: str | None = Query(None),
    timeframe: str = Query("7d"),
    ranker: TrendRanker = Depends(get_trend_ranker),
):
    return await ranker.compute_trending(
        limit=positive_int(limit, settings.TRENDING_DEFAULT_LIMIT, settings.TRENDING_MAX_LIMIT),
        timeframe=timeframe,
    )


@router.get("/categories", response_model=CategoriesResponse)
async def get_categories(aggregator: CategoryAggregator = Depends(get_category_aggregator)):
    return await aggregator.list_categories()
