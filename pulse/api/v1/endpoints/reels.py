"""Reel listing."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from pulse.api.deps import get_record_store
from pulse.api.params import positive_int
from pulse.core.config import settings
from pulse.schemas.reel import ReelListResponse
from pulse.services import reel_service
from pulse.store.base import RecordStore, SortOrder

router = APIRouter(prefix="/reels", tags=["reels"])


@router.get("", response_model=ReelListResponse)
async def list_reels(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    category: str | None = Query(None),
    user_id: UUID | None = Query(None, alias="userId"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str | None = Query("desc", alias="sortOrder"),
    store: RecordStore = Depends(get_record_store),
):
    return await reel_service.list_reels(
        store,
        page=positive_int(page, 1),
        limit=positive_int(limit, settings.REELS_DEFAULT_PAGE_SIZE, settings.FEED_MAX_PAGE_SIZE),
        category=category.strip() if category else None,
        user_id=user_id,
        sort_field=sort_by or "createdAt",
        sort_order=SortOrder.parse(sort_order),
    )
