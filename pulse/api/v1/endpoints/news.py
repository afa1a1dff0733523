"""News topic reads."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from pulse.api.deps import get_record_store
from pulse.api.params import optional_bool, positive_int
from pulse.core.config import settings
from pulse.schemas.news import NewsListResponse, NewsTopicResponse
from pulse.services import news_service
from pulse.store.base import RecordStore, SortOrder

router = APIRouter(prefix="/news-topics", tags=["news"])


@router.get("", response_model=NewsListResponse)
async def list_news_topics(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    category: str | None = Query(None),
    featured: str | None = Query(None),
    search: str | None = Query(None),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str | None = Query("desc", alias="sortOrder"),
    store: RecordStore = Depends(get_record_store),
):
    return await news_service.list_news(
        store,
        page=positive_int(page, 1),
        limit=positive_int(limit, settings.NEWS_DEFAULT_PAGE_SIZE, settings.FEED_MAX_PAGE_SIZE),
        category=category,
        # Only featured=true narrows the listing
        featured=True if optional_bool(featured) else None,
        search=search.strip() if search else None,
        sort_field=sort_by or "createdAt",
        sort_order=SortOrder.parse(sort_order),
    )


@router.get("/featured/latest", response_model=list[NewsTopicResponse])
async def get_featured_news(
    limit: str | None = Query(None),
    store: RecordStore = Depends(get_record_store),
):
    return await news_service.featured_news(
        store, limit=positive_int(limit, settings.NEWS_FEATURED_LIMIT, settings.FEED_MAX_PAGE_SIZE)
    )


@router.get("/categories/list", response_model=list[str])
async def get_news_categories(store: RecordStore = Depends(get_record_store)):
    return await news_service.news_categories(store)


@router.get("/{news_id}", response_model=NewsTopicResponse)
async def get_news_topic(news_id: UUID, store: RecordStore = Depends(get_record_store)):
    """Single news topic. Each call increments its view counter."""
    return await news_service.get_news(store, news_id)
