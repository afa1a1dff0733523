"""Reel listing."""
import logging
from uuid import UUID

from pulse.core.concurrency import gather_or_cancel
from pulse.core.errors import ReelsUnavailableError, StoreError
from pulse.schemas.base import PagePagination
from pulse.schemas.reel import ReelListResponse, ReelResponse
from pulse.store.base import EntityKind, RecordFilter, RecordStore, SortKey, SortOrder

logger = logging.getLogger(__name__)


async def list_reels(
    store: RecordStore,
    page: int = 1,
    limit: int = 10,
    category: str | None = None,
    user_id: UUID | None = None,
    sort_field: str = "createdAt",
    sort_order: SortOrder = SortOrder.DESC,
) -> ReelListResponse:
    """Public reels, optionally narrowed to a category name substring and one author."""
    where = RecordFilter(eligible=True, category=category or None, author_id=user_id)
    try:
        rows, total = await gather_or_cancel(
            store.find_many(EntityKind.REEL, where, [SortKey(sort_field, sort_order)], skip=(page - 1) * limit, take=limit),
            store.count(EntityKind.REEL, where),
        )
    except StoreError as exc:
        logger.exception("Error fetching reels (page=%s, limit=%s, category=%r, userId=%s)", page, limit, category, user_id)
        raise ReelsUnavailableError() from exc

    return ReelListResponse(
        data=[ReelResponse.model_validate(row) for row in rows],
        pagination=PagePagination.build(page, limit, total),
    )
