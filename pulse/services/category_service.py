"""Categories usable as a feed filter."""
import logging

from pulse.core.concurrency import gather_or_cancel
from pulse.core.errors import CategoriesUnavailableError, StoreError
from pulse.schemas.category import CategoriesResponse, PostCategoryResponse, ReelCategoryResponse
from pulse.store.base import EntityKind, RecordFilter, RecordStore, SortKey, SortOrder

logger = logging.getLogger(__name__)

BY_NAME = (SortKey("name", SortOrder.ASC),)


class CategoryAggregator:
    def __init__(self, store: RecordStore):
        self.store = store

    async def list_categories(self) -> CategoriesResponse:
        """Post and reel categories with live counts of eligible items, plus news category strings."""
        eligible = RecordFilter(eligible=True)
        try:
            post_categories, post_counts, news_values, reel_categories, reel_counts = await gather_or_cancel(
                self.store.find_many(EntityKind.POST_CATEGORY, order_by=BY_NAME),
                self.store.count_by(EntityKind.POST, "category_id", eligible),
                self.store.find_distinct(EntityKind.NEWS, "category", eligible),
                self.store.find_many(EntityKind.REEL_CATEGORY, order_by=BY_NAME),
                self.store.count_by(EntityKind.REEL, "category_id", eligible),
            )
        except StoreError as exc:
            logger.exception("Error fetching categories")
            raise CategoriesUnavailableError() from exc

        return CategoriesResponse(
            post_categories=[
                PostCategoryResponse.model_validate(c).model_copy(update={"posts_count": post_counts.get(c.id, 0)})
                for c in post_categories
            ],
            news_categories=sorted(v for v in news_values if v),
            reel_categories=[
                ReelCategoryResponse.model_validate(c).model_copy(update={"reels_count": reel_counts.get(c.id, 0)})
                for c in reel_categories
            ],
        )
