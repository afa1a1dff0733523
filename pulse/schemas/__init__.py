from pulse.schemas.category import CategoriesResponse, PostCategoryResponse, ReelCategoryResponse
from pulse.schemas.feed import (
    FeedItem,
    FeedNewsItem,
    FeedPostItem,
    FeedReelItem,
    FeedResponse,
    TrendingItem,
    TrendingNewsItem,
    TrendingPostItem,
    TrendingResponse,
)
from pulse.schemas.news import NewsListResponse, NewsTopicResponse
from pulse.schemas.reel import ReelListResponse, ReelResponse
