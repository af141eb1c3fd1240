"""
YouTube extraction.

The embed URL and fallback thumbnail are derived from the video ID with no
network call; title, description, author and thumbnail come from the page's
meta tags.
"""

import logging
import re
from urllib.parse import parse_qs, urlparse

from app.models.content import ExtractedContent, Platform
from app.services.extractors.base import ContentExtractor


logger = logging.getLogger(__name__)

YOUTUBE_VIDEO_ID_LENGTH: int = 11

YOUTUBE_WATCH_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.|m\.)?youtube\.com/watch\?.*v=([a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)
YOUTUBE_SHORT_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.)?youtu\.be/([a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)
YOUTUBE_SHORTS_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.|m\.)?youtube\.com/shorts/([a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)
YOUTUBE_EMBED_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.)?youtube\.com/embed/([a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)


def extract_video_id(url: str) -> str | None:
    """
    Extract the 11-character video ID from a YouTube URL.

    Supports ``youtu.be/<id>``, ``/shorts/<id>``, ``/embed/<id>`` and
    ``?v=<id>`` forms.

    Example:
        >>> extract_video_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    if not url:
        return None
    url = url.strip()

    for pattern in (
        YOUTUBE_WATCH_PATTERN,
        YOUTUBE_SHORT_PATTERN,
        YOUTUBE_SHORTS_PATTERN,
        YOUTUBE_EMBED_PATTERN,
    ):
        match = pattern.search(url)
        if match:
            return match.group(1)

    # v= anywhere in the query, e.g. /watch?feature=share&v=...
    video_ids = parse_qs(urlparse(url).query).get("v", [])
    if video_ids and len(video_ids[0]) == YOUTUBE_VIDEO_ID_LENGTH:
        return video_ids[0]

    logger.warning(f"Could not extract YouTube video ID from URL: {url}")
    return None


def embed_url_for(video_id: str) -> str:
    return f"https://www.youtube.com/embed/{video_id}"


def thumbnail_url_for(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


class YouTubeExtractor(ContentExtractor):
    """Extracts YouTube videos and shorts."""

    platform = Platform.YOUTUBE

    async def extract(self, url: str) -> ExtractedContent:
        video_id = extract_video_id(url)
        content = await self.scraper.scrape(url)

        content.video_url = ""
        if video_id:
            content.embed_url = embed_url_for(video_id)
            if not content.thumbnail:
                content.thumbnail = thumbnail_url_for(video_id)
        return content
