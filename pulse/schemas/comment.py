"""Pydantic schemas for Comment."""
from datetime import datetime
from uuid import UUID

from pulse.schemas.base import CamelModel
from pulse.schemas.user import AuthorSummary


class CommentPreview(CamelModel):
    id: UUID
    content: str
    created_at: datetime
    author: AuthorSummary | None = None
