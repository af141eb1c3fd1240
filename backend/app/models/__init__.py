"""
Models Package for Social Saver.

Pydantic models for extracted content, classification results, bookmarks,
users and API payloads. Stored documents use the ``_id`` alias with
ObjectIds converted to strings.
"""

from app.models.bookmark import (
    Bookmark,
    BookmarkDraft,
    BookmarkListResponse,
    BookmarkStats,
    CategoryCount,
    LinkSubmissionRequest,
    LinkSubmissionResponse,
    PinUpdateRequest,
    User,
)
from app.models.content import ClassificationResult, ExtractedContent, Platform


__all__ = [
    "Bookmark",
    "BookmarkDraft",
    "BookmarkListResponse",
    "BookmarkStats",
    "CategoryCount",
    "ClassificationResult",
    "ExtractedContent",
    "LinkSubmissionRequest",
    "LinkSubmissionResponse",
    "PinUpdateRequest",
    "Platform",
    "User",
]
