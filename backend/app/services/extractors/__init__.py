"""
Platform extractors and the dispatcher that picks one per URL.

``ContentExtractionService.extract`` is the extraction boundary: it detects
the platform, runs the matching extractor, stamps the platform on the
result, bounds the caption, and guarantees that reels carry no embed URL.
It never raises; an unexpected failure inside an extractor yields the
URL-derived degraded record.
"""

import logging

from app.config import Settings, get_settings
from app.models.content import ExtractedContent, Platform
from app.services.extractors.article import ArticleExtractor
from app.services.extractors.base import ContentExtractor, OEmbedError, cap_caption
from app.services.extractors.instagram import InstagramExtractor, is_instagram_reel
from app.services.extractors.twitter import TwitterExtractor
from app.services.extractors.youtube import YouTubeExtractor, extract_video_id
from app.services.media_resolver import MediaResolver, create_media_resolver
from app.services.meta_scraper import MetaTagScraper, degraded_record
from app.services.platform_detector import detect_platform
from app.utils.http import HttpClient, create_http_client
from app.utils.logger import add_log_context


logger = logging.getLogger(__name__)


class ContentExtractionService:
    """
    Routes a URL to its platform extractor.

    Example:
        >>> service = create_content_extraction_service()
        >>> content = await service.extract("https://www.instagram.com/reel/Cx7yZ1qLk9W/")
        >>> content.platform
        <Platform.INSTAGRAM: 'instagram'>
    """

    def __init__(
        self,
        http: HttpClient,
        scraper: MetaTagScraper,
        media_resolver: MediaResolver | None = None,
    ) -> None:
        self.extractors: dict[Platform, ContentExtractor] = {
            Platform.INSTAGRAM: InstagramExtractor(http, scraper, media_resolver),
            Platform.TWITTER: TwitterExtractor(http, scraper),
            Platform.YOUTUBE: YouTubeExtractor(http, scraper),
            Platform.ARTICLE: ArticleExtractor(http, scraper),
        }

    async def extract(self, url: str) -> ExtractedContent:
        platform = detect_platform(url)
        ctx_logger = add_log_context(logger, url=url, platform=platform.value)

        try:
            content = await self.extractors[platform].extract(url)
        except Exception:
            ctx_logger.exception("Extractor raised unexpectedly, using URL-derived record")
            content = degraded_record(url)

        content.platform = platform
        content.caption = cap_caption(content.caption)
        if platform == Platform.INSTAGRAM and is_instagram_reel(url):
            content.embed_url = None

        ctx_logger.info(f"Extracted content: title={content.title[:60]!r}")
        return content


def create_content_extraction_service(settings: Settings | None = None) -> ContentExtractionService:
    """Wire the extractors with an HTTP client, scraper and media resolver built from settings."""
    settings = settings or get_settings()
    http = create_http_client(settings)
    return ContentExtractionService(
        http=http,
        scraper=MetaTagScraper(http),
        media_resolver=create_media_resolver(settings),
    )


__all__ = [
    "ArticleExtractor",
    "ContentExtractionService",
    "ContentExtractor",
    "InstagramExtractor",
    "OEmbedError",
    "TwitterExtractor",
    "YouTubeExtractor",
    "cap_caption",
    "create_content_extraction_service",
    "extract_video_id",
    "is_instagram_reel",
]
