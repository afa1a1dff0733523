"""SQLAlchemy declarative base and model imports for Alembic."""
from pulse.db.session import Base  # noqa: F401
from pulse.models.user import User  # noqa: F401
from pulse.models.category import PostCategory, ReelCategory  # noqa: F401
from pulse.models.post import Comment, Post  # noqa: F401
from pulse.models.news import NewsTopic  # noqa: F401
from pulse.models.reel import Reel  # noqa: F401

__all__ = ["Base", "User", "PostCategory", "ReelCategory", "Comment", "Post", "NewsTopic", "Reel"]
