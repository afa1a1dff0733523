"""V1 API router aggregation."""
from fastapi import APIRouter

from pulse.api.v1.endpoints import feed, news, reels

api_router = APIRouter(prefix="/v1")
api_router.include_router(feed.router)
api_router.include_router(news.router)
api_router.include_router(reels.router)
