"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite database file (aiosqlite) so store reads run
through the real SQLAlchemy store. NullPool keeps connections from leaking
across event loops.
"""
import os
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Must be set before pulse.core.config builds its settings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TRENDING_CACHE_ENABLED", "false")

from pulse.api.deps import get_record_store, get_trending_cache  # noqa: E402
from pulse.core.time import utcnow  # noqa: E402
from pulse.db.session import Base  # noqa: E402
from pulse.main import app  # noqa: E402
from pulse.models import Comment, NewsTopic, Post, Reel, User  # noqa: E402
from pulse.store.sql import SqlRecordStore  # noqa: E402


def minutes_ago(minutes: float):
    return utcnow() - timedelta(minutes=minutes)


def hours_ago(hours: float):
    return utcnow() - timedelta(hours=hours)


class Seeder:
    """Persist test records. Posts/news/reels are spaced one ``step`` minute apart, newest first."""

    def __init__(self, session_maker):
        self.session_maker = session_maker
        self._author = None

    async def add(self, *records):
        async with self.session_maker() as session:
            session.add_all(records)
            await session.commit()
        return list(records)

    async def author(self) -> User:
        if self._author is None:
            (self._author,) = await self.add(
                User(username="ana", display_name="Ana Restrepo", avatar_url="https://cdn.example/ana.png", is_verified=True)
            )
        return self._author

    async def posts(self, count: int = 1, *, start: float = 0, step: float = 1, **fields) -> list[Post]:
        author = await self.author()
        return await self.add(*(
            Post(**{
                "author_id": author.id,
                "content": f"Post {i}",
                "tags": ["civic"],
                "created_at": minutes_ago(start + i * step),
                **fields,
            })
            for i in range(count)
        ))

    async def news(self, count: int = 1, *, start: float = 0, step: float = 1, **fields) -> list[NewsTopic]:
        return await self.add(*(
            NewsTopic(**{
                "title": f"News {i}",
                "content": f"Body {i}",
                "author": "Redacción",
                "created_at": minutes_ago(start + i * step),
                **fields,
            })
            for i in range(count)
        ))

    async def reels(self, count: int = 1, *, start: float = 0, step: float = 1, **fields) -> list[Reel]:
        author = await self.author()
        return await self.add(*(
            Reel(**{
                "author_id": author.id,
                "title": f"Reel {i}",
                "video_url": f"https://cdn.example/reels/{i}.mp4",
                "duration": 30,
                "created_at": minutes_ago(start + i * step),
                **fields,
            })
            for i in range(count)
        ))

    async def comments(self, post: Post, count: int) -> list[Comment]:
        """Comment 0 is the newest."""
        author = await self.author()
        return await self.add(*(
            Comment(post_id=post.id, author_id=author.id, content=f"Comment {i}", created_at=minutes_ago(i))
            for i in range(count)
        ))


@pytest.fixture
async def session_maker(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pulse.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
def store(session_maker):
    return SqlRecordStore(session_maker)


@pytest.fixture
def seed(session_maker):
    return Seeder(session_maker)


@pytest.fixture
async def client(store):
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_trending_cache] = lambda: None
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
