"""Pulse Feed API - FastAPI application."""
import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from pulse.api.v1.api import api_router
from pulse.core.cache import TrendingCache
from pulse.core.config import settings
from pulse.core.errors import PulseError
from pulse.core.logging import setup_logging
from pulse.core.time import as_utc, utcnow
from pulse.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Starting %s (env=%s)", settings.APP_NAME, settings.ENVIRONMENT)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database: OK")
    except Exception as e:
        logger.warning("Database connection failed: %s", e)

    app.state.trending_cache = None
    if settings.TRENDING_CACHE_ENABLED:
        app.state.trending_cache = TrendingCache.from_url(settings.REDIS_URL, settings.TRENDING_CACHE_TTL_SECONDS)
        logger.info("Trending cache: redis (ttl=%ss)", settings.TRENDING_CACHE_TTL_SECONDS)

    logger.info("API: /api/v1 | Docs: /docs | Health: /health | Ready (DB): /ready")
    yield

    logger.info("Shutting down...")
    if app.state.trending_cache is not None:
        await app.state.trending_cache.close()
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["Content-Type", "Authorization"],
)
app.include_router(api_router, prefix="/api")


def error_payload(exc: Exception, code: str, message: str) -> dict:
    payload = {
        "code": code,
        "message": message,
        "timestamp": as_utc(utcnow()).isoformat(),
    }
    if not settings.is_production:
        cause = exc.__cause__ or exc
        payload["detail"] = str(cause)
        payload["stack"] = "".join(traceback.format_exception(exc))
    return payload


@app.exception_handler(PulseError)
async def pulse_error_handler(request: Request, exc: PulseError):
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc, exc.code, exc.message))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_payload(exc, "internal_error", "Internal server error"))


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "api": "/api/v1",
    }


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "timestamp": as_utc(utcnow()).isoformat(),
    }


@app.get("/ready")
async def ready():
    """Health check including DB - use to verify backend is fully operational."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected"}
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": str(e)},
        )
