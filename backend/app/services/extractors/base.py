"""
Shared pieces for platform extractors.
"""

from app.models.content import ExtractedContent, Platform
from app.services.meta_scraper import MetaTagScraper
from app.utils.http import ExtractionError, HttpClient


# Captions longer than this are cut to CAPTION_TRUNCATED_LENGTH + "..."
MAX_CAPTION_LENGTH: int = 500
CAPTION_TRUNCATED_LENGTH: int = 300

TITLE_MAX_LENGTH: int = 100


class OEmbedError(ExtractionError):
    """An oEmbed endpoint answered but the payload had nothing usable."""


def cap_caption(caption: str) -> str:
    """Bound caption size before it is classified and stored."""
    if caption and len(caption) > MAX_CAPTION_LENGTH:
        return caption[:CAPTION_TRUNCATED_LENGTH] + "..."
    return caption or ""


class ContentExtractor:
    """
    Base class for platform-specific extraction strategies.

    Subclasses implement ``extract`` and may raise nothing: each strategy
    degrades internally until it reaches a URL-derived record.
    """

    platform: Platform = Platform.ARTICLE

    def __init__(self, http: HttpClient, scraper: MetaTagScraper) -> None:
        self.http = http
        self.scraper = scraper

    async def extract(self, url: str) -> ExtractedContent:
        raise NotImplementedError
