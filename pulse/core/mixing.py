"""Mixing ratios, engagement weights and trending windows.

Percentages are integers so quotas are exact floors: ``size * percent // 100``.
The remainder is dropped on purpose; quotas are never redistributed when a
source comes back short.
"""
from dataclasses import dataclass, field

from pulse.core.config import Settings, settings as default_settings


@dataclass(frozen=True)
class FeedQuotas:
    posts: int
    news: int
    reels: int


@dataclass(frozen=True)
class TrendingQuotas:
    posts: int
    news: int


@dataclass(frozen=True)
class FeedMix:
    posts_percent: int = 60
    news_percent: int = 30
    reels_percent: int = 10

    trending_posts_percent: int = 60
    trending_news_percent: int = 40
    trending_windows: dict[str, int] = field(default_factory=lambda: {"24h": 1, "7d": 7})
    trending_fallback_days: int = 30

    post_like_weight: int = 1
    post_share_weight: int = 1
    post_comment_weight: int = 1
    news_view_weight: int = 1

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "FeedMix":
        s = s or default_settings
        return cls(
            posts_percent=s.FEED_POSTS_PERCENT,
            news_percent=s.FEED_NEWS_PERCENT,
            reels_percent=s.FEED_REELS_PERCENT,
            trending_posts_percent=s.TRENDING_POSTS_PERCENT,
            trending_news_percent=s.TRENDING_NEWS_PERCENT,
            trending_windows=dict(s.TRENDING_WINDOWS),
            trending_fallback_days=s.TRENDING_FALLBACK_WINDOW_DAYS,
            post_like_weight=s.POST_LIKE_WEIGHT,
            post_share_weight=s.POST_SHARE_WEIGHT,
            post_comment_weight=s.POST_COMMENT_WEIGHT,
            news_view_weight=s.NEWS_VIEW_WEIGHT,
        )

    def feed_quotas(self, page_size: int) -> FeedQuotas:
        return FeedQuotas(
            posts=page_size * self.posts_percent // 100,
            news=page_size * self.news_percent // 100,
            reels=page_size * self.reels_percent // 100,
        )

    def trending_quotas(self, limit: int) -> TrendingQuotas:
        return TrendingQuotas(
            posts=limit * self.trending_posts_percent // 100,
            news=limit * self.trending_news_percent // 100,
        )

    def window_days(self, timeframe: str | None) -> int:
        """Lookback in days; unknown timeframes fall back to the widest window."""
        return self.trending_windows.get(timeframe or "", self.trending_fallback_days)

    def post_engagement(self, likes: int, shares: int, comments: int) -> int:
        return (
            likes * self.post_like_weight
            + shares * self.post_share_weight
            + comments * self.post_comment_weight
        )

    def news_engagement(self, views: int) -> int:
        return views * self.news_view_weight
