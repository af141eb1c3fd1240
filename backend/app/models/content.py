"""
Content Pydantic models for Social Saver.

Defines the records that flow through the extraction and classification
pipeline:

- ``Platform``: the closed set of source platforms a URL can belong to
- ``ExtractedContent``: what an extractor learned about a URL
- ``ClassificationResult``: title, category, tags and summary produced by the
  classification engine

Both records are built fresh for every submitted URL and passed by value.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class Platform(str, Enum):
    """Source platform of a submitted URL. Unknown hosts are ``ARTICLE``."""

    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    YOUTUBE = "youtube"
    ARTICLE = "article"


# =============================================================================
# MODELS
# =============================================================================


class ExtractedContent(BaseModel):
    """
    Output of the extraction stage.

    Every field has a default so a partially successful strategy can still
    produce a record. ``platform`` is assigned by the extraction dispatcher
    after the platform extractor returns, and ``raw_data`` is kept for
    diagnostics only.

    Attributes:
        platform: Source platform, authoritative for downstream logic
        title: Native title; may be empty or a placeholder
        caption: Richest available description of the content
        author: Handle or display name
        thumbnail: Preview image URL or empty string
        video_url: Direct playable media URL or empty string
        embed_url: Iframe-embeddable URL; ``None`` when embedding is not allowed
        raw_data: Provider response kept for diagnostics
    """

    platform: Platform = Field(default=Platform.ARTICLE, description="Source platform")
    title: str = Field(default="", description="Native title, possibly a placeholder")
    caption: str = Field(default="", description="Natural-language description of the content")
    author: str = Field(default="", description="Author handle or name")
    thumbnail: str = Field(default="", description="Preview image URL")
    video_url: str = Field(default="", description="Direct media URL (best effort)")
    embed_url: str | None = Field(default=None, description="URL suitable for iframe embedding")
    raw_data: dict[str, Any] | None = Field(
        default=None, description="Opaque provider response, never parsed downstream"
    )

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("title", "caption", "author", "thumbnail", "video_url", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        """Providers return ``null`` for missing fields; store empty strings instead."""
        if v is None:
            return ""
        return str(v).strip()


class ClassificationResult(BaseModel):
    """
    Output of the classification engine.

    Attributes:
        title: Short natural-language title (empty when nothing was produced)
        category: One value of the closed category vocabulary or ``Uncategorized``
        tags: Lowercase, deduplicated topic tags
        summary: One or two sentences describing the content
        provider: Name of the strategy that produced the result
    """

    title: str = Field(default="", description="Generated title")
    category: str = Field(default="Uncategorized", description="Category from the vocabulary")
    tags: list[str] = Field(default_factory=list, description="Lowercase topic tags")
    summary: str = Field(default="", description="One or two sentence summary")
    provider: str = Field(default="keyword", description="Strategy that produced this result")
