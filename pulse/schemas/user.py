"""Pydantic schemas for content authors."""
from uuid import UUID

from pulse.schemas.base import CamelModel


class AuthorSummary(CamelModel):
    id: UUID
    username: str
    display_name: str | None = None
    avatar_url: str | None = None
    is_verified: bool = False
