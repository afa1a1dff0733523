"""News topic model."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, Uuid

from pulse.core.time import utcnow
from pulse.db.session import Base
from pulse.db.types import TagList


class NewsTopic(Base):
    __tablename__ = "news_topics"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    source_url = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)  # free text
    author = Column(String(200), nullable=True)  # byline, not a user
    tags = Column(TagList, nullable=True)
    views_count = Column(Integer, default=0, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    is_published = Column(Boolean, default=True, nullable=False, index=True)
    published_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
