import asyncio
import random
import sys
import os
from datetime import timedelta

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from pulse.core.time import utcnow
from pulse.db.session import async_session_maker
from pulse.models import Comment, NewsTopic, Post, PostCategory, Reel, ReelCategory, User

POST_CATEGORIES = [
    ("Politics", "#1E40AF", "landmark"),
    ("Economy", "#047857", "chart"),
    ("Security", "#B91C1C", "shield"),
    ("Culture", "#A21CAF", "palette"),
]
REEL_CATEGORIES = [("Protests", "#DC2626", "megaphone"), ("Explainers", "#2563EB", "lightbulb")]
NEWS_CATEGORIES = ["politics", "economy", "security", "environment"]


async def seed(count):
    async with async_session_maker() as session:
        res = await session.execute(select(User).where(User.username == "demo"))
        if res.scalar_one_or_none():
            print("Error: demo data already present (user 'demo' exists).")
            return

        now = utcnow()
        author = User(username="demo", display_name="Demo Citizen", is_verified=True)
        post_categories = [PostCategory(name=n, color=c, icon=i) for n, c, i in POST_CATEGORIES]
        reel_categories = [ReelCategory(name=n, color=c, icon=i) for n, c, i in REEL_CATEGORIES]
        session.add_all([author, *post_categories, *reel_categories])
        await session.flush()

        posts = []
        for i in range(count):
            post = Post(
                author_id=author.id,
                content=f"Demo post #{i}",
                category_id=random.choice(post_categories).id,
                tags=["demo"],
                likes_count=random.randint(0, 200),
                shares_count=random.randint(0, 40),
                is_public=random.random() > 0.1,
                created_at=now - timedelta(hours=random.randint(0, 24 * 14)),
            )
            posts.append(post)
        session.add_all(posts)
        await session.flush()

        for post in random.sample(posts, k=min(len(posts), count // 2)):
            for j in range(random.randint(1, 5)):
                session.add(Comment(post_id=post.id, author_id=author.id, content=f"Comment {j}"))

        for i in range(count // 2):
            session.add(NewsTopic(
                title=f"Demo news #{i}",
                content="Lorem ipsum",
                category=random.choice(NEWS_CATEGORIES),
                author="Newsroom",
                views_count=random.randint(0, 500),
                is_featured=i % 5 == 0,
                created_at=now - timedelta(hours=random.randint(0, 24 * 14)),
            ))

        for i in range(count // 4):
            session.add(Reel(
                author_id=author.id,
                title=f"Demo reel #{i}",
                video_url=f"https://cdn.example/reels/{i}.mp4",
                duration=random.randint(10, 90),
                category_id=random.choice(reel_categories).id,
                likes_count=random.randint(0, 100),
                created_at=now - timedelta(hours=random.randint(0, 24 * 14)),
            ))

        await session.commit()
        print(f"Success: seeded {count} posts, {count // 2} news topics, {count // 4} reels.")


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 40
    asyncio.run(seed(count))
