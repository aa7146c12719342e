"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict


class BookmarkCreate(BaseModel):
    """
    Validated fields for a new bookmark.

    Built by services.bookmark_service.validate_new_bookmark, which applies the
    ordered create rules and reports the first failure as plain text.
    """

    title: str
    url: str
    description: str | None = None
    rating: int


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses. Free-text fields are already sanitized."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str | None
    rating: int
