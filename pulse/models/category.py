"""Curated categories for posts and reels. News carries a free-text category instead."""
import uuid

from sqlalchemy import Column, DateTime, String, Text, Uuid
from sqlalchemy.orm import relationship

from pulse.core.time import utcnow
from pulse.db.session import Base


class PostCategory(Base):
    __tablename__ = "post_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(20), nullable=True)  # hex, e.g. #FFD700
    icon = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=utcnow)

    posts = relationship("Post", back_populates="category")


class ReelCategory(Base):
    __tablename__ = "reel_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(20), nullable=True)
    icon = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=utcnow)

    reels = relationship("Reel", back_populates="category")
