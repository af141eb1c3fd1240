"""
Bookmark and user Pydantic models for Social Saver.

``BookmarkDraft`` is what the pipeline hands to persistence; ``Bookmark`` is
a stored document as returned by the dashboard API. The remaining models
are request and response bodies for the HTTP routes.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.content import Platform


# =============================================================================
# PIPELINE OUTPUT
# =============================================================================


class BookmarkDraft(BaseModel):
    """
    Fully extracted and classified bookmark, not yet stored.

    Attributes:
        url: Submitted URL
        platform: Source platform
        title: Final title after normalization
        caption: Extracted caption (bounded length)
        summary: Classifier summary
        category: Vocabulary category or ``Uncategorized``
        tags: Lowercase topic tags
        thumbnail: Preview image URL
        video_url: Direct media URL
        embed_url: Embeddable URL; empty for Instagram reels
        author: Author handle or name
        raw_data: Provider response kept for diagnostics
    """

    url: str
    platform: Platform = Platform.ARTICLE
    title: str = ""
    caption: str = ""
    summary: str = ""
    category: str = "Uncategorized"
    tags: list[str] = Field(default_factory=list)
    thumbnail: str = ""
    video_url: str = ""
    embed_url: str = ""
    author: str = ""
    raw_data: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


# =============================================================================
# STORED DOCUMENTS
# =============================================================================


class Bookmark(BookmarkDraft):
    """A stored bookmark."""

    id: str | None = Field(default=None, alias="_id", description="MongoDB ObjectId as string")
    user: str | None = Field(default=None, description="Owning user's ObjectId as string")
    pinned: bool = Field(default=False, description="Pinned bookmarks sort first on the dashboard")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    @field_validator("id", "user", mode="before")
    @classmethod
    def object_id_to_str(cls, v: Any) -> str | None:
        return str(v) if v is not None else None


class User(BaseModel):
    """A WhatsApp sender, keyed by phone number (e.g. ``whatsapp:+15551234567``)."""

    id: str | None = Field(default=None, alias="_id")
    phone: str = Field(..., min_length=1)
    name: str = "User"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def object_id_to_str(cls, v: Any) -> str | None:
        return str(v) if v is not None else None


# =============================================================================
# REQUEST / RESPONSE BODIES
# =============================================================================


class LinkSubmissionRequest(BaseModel):
    """Body of ``POST /webhook/test``."""

    url: str | None = None
    phone: str = "test:+0000000000"


class LinkSubmissionResponse(BaseModel):
    message: str
    bookmark: Bookmark


class PinUpdateRequest(BaseModel):
    pinned: bool


class BookmarkListResponse(BaseModel):
    bookmarks: list[Bookmark]
    total: int
    page: int
    total_pages: int


class CategoryCount(BaseModel):
    name: str
    count: int


class BookmarkStats(BaseModel):
    total: int
    pinned: int
    platforms: dict[str, int]
    top_categories: list[CategoryCount]
