"""
Bookmark Pipeline Service for Social Saver

One-shot processing of a submitted link:

    URL -> platform extractor -> classification engine -> normalizer -> BookmarkDraft

Once a URL passes ``validate_submission_url`` the pipeline always produces a
draft; every network stage degrades internally. The helpers in this module
also hold the user-facing WhatsApp texts (guidance, confirmation, error).
"""

import logging
import re
from urllib.parse import urlparse

from app.config import Settings, get_settings
from app.models.bookmark import BookmarkDraft
from app.models.content import Platform
from app.services.classification.engine import ClassificationEngine, create_classification_engine
from app.services.content_normalizer import resolve_category, resolve_title
from app.services.extractors import (
    ContentExtractionService,
    create_content_extraction_service,
    is_instagram_reel,
)
from app.utils.logger import add_log_context


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)

# Dotted labels of word characters and hyphens, or an IPv4/IPv6 literal
HOST_PATTERN = re.compile(r"^(?:[\w-]+\.)*[\w-]+\.?$|^[0-9a-f:.]+$", re.IGNORECASE)

GUIDANCE_MESSAGE = (
    "👋 Hey! Send me a link (Instagram, Twitter, or any article) and I'll save it to your dashboard!"
    "\n\nTry sending an Instagram Reel or Post link."
)

ERROR_REPLY_MESSAGE = "⚠️ I couldn't process that link. Please check the URL and try again."

PLATFORM_EMOJI: dict[str, str] = {
    Platform.INSTAGRAM.value: "📸",
    Platform.TWITTER.value: "🐦",
    Platform.YOUTUBE.value: "🎬",
    Platform.ARTICLE.value: "📄",
}
DEFAULT_EMOJI = "🔖"


class InvalidSubmissionError(ValueError):
    """The submission has no URL, or the URL is not an absolute http(s) URL."""


# =============================================================================
# INPUT HELPERS
# =============================================================================


def find_url(message_text: str | None) -> str | None:
    """Return the first http(s) URL in a chat message, or ``None``."""
    match = URL_PATTERN.search(message_text or "")
    return match.group(0) if match else None


def validate_submission_url(url: str | None) -> str:
    """
    Check a directly submitted URL.

    Returns:
        The stripped URL.

    Raises:
        InvalidSubmissionError: If the URL is missing, not http(s), or has no host.
    """
    if not url or not url.strip():
        raise InvalidSubmissionError("URL is required")

    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidSubmissionError(f"URL could not be parsed: {e}") from e

    if parsed.scheme.lower() not in ("http", "https") or not parsed.hostname:
        raise InvalidSubmissionError("URL must be an absolute http or https URL")
    if not HOST_PATTERN.match(parsed.hostname):
        raise InvalidSubmissionError(f"URL host '{parsed.hostname}' is not valid")
    return url


def build_reply_message(draft: BookmarkDraft, frontend_url: str) -> str:
    """Confirmation text sent back over WhatsApp after a bookmark is saved."""
    emoji = PLATFORM_EMOJI.get(str(draft.platform), DEFAULT_EMOJI)
    tags = ", ".join(draft.tags) or "none"
    return (
        f"{emoji} Got it! Saved to your *{draft.category}* bucket.\n\n"
        f"📌 Title: {draft.title}\n"
        f"📂 Category: {draft.category}\n\n"
        f"📝 {draft.summary}\n\n"
        f"🏷️ Tags: {tags}\n\n"
        f"View your saved links at: {frontend_url}"
    )


# =============================================================================
# PIPELINE
# =============================================================================


class BookmarkPipeline:
    """
    Extraction and classification for one URL at a time.

    Holds no per-request state; the extraction service and classification
    engine it wraps are created once and shared.
    """

    def __init__(self, extraction: ContentExtractionService, classification: ClassificationEngine) -> None:
        self.extraction = extraction
        self.classification = classification

    async def process_url(self, url: str) -> BookmarkDraft:
        """
        Build a bookmark draft for ``url``.

        Raises:
            InvalidSubmissionError: If ``url`` is not a usable http(s) URL.
        """
        url = validate_submission_url(url)

        content = await self.extraction.extract(url)
        ctx_logger = add_log_context(logger, url=url, platform=content.platform.value)

        classification = await self.classification.classify(
            title=content.title,
            caption=content.caption,
            platform=content.platform.value,
            author=content.author,
            url=url,
        )

        reel = content.platform == Platform.INSTAGRAM and is_instagram_reel(url)
        draft = BookmarkDraft(
            url=url,
            platform=content.platform,
            title=resolve_title(content, classification, url),
            caption=content.caption,
            summary=classification.summary,
            category=resolve_category(classification.category),
            tags=classification.tags,
            thumbnail=content.thumbnail,
            video_url=content.video_url,
            embed_url="" if reel else (content.embed_url or url),
            author=content.author,
            raw_data=content.raw_data or {},
        )

        ctx_logger.info(
            f"Bookmark ready: category={draft.category} provider={classification.provider} "
            f"title={draft.title[:60]!r}"
        )
        return draft


def create_bookmark_pipeline(settings: Settings | None = None) -> BookmarkPipeline:
    """Factory wiring extraction and classification from settings."""
    settings = settings or get_settings()
    return BookmarkPipeline(
        extraction=create_content_extraction_service(settings),
        classification=create_classification_engine(settings),
    )
