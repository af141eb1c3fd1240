"""
Instagram extraction.

Order of strategies:
1. oEmbed for caption, thumbnail and author, gap-filled from meta tags
2. Meta tags alone when oEmbed fails

Independently of which strategy produced the text, a direct video URL is
looked for in ``og:video`` tags (served differently to different crawlers,
so several user agents are tried) and then via the media resolver.

Reels never get an embed URL; Instagram refuses to render them in iframes.
"""

import asyncio
import logging
import re
from urllib.parse import urlparse, urlunparse

from app.models.content import ExtractedContent, Platform
from app.services.extractors.base import TITLE_MAX_LENGTH, ContentExtractor, OEmbedError
from app.services.media_resolver import MediaResolver, NullMediaResolver
from app.services.meta_scraper import UNTITLED, MetaTagScraper
from app.utils.http import ExtractionError, FetchError, HttpClient
from app.utils.title_utils import is_bare_slug


logger = logging.getLogger(__name__)

INSTAGRAM_OEMBED_ENDPOINT = "https://api.instagram.com/oembed"

FALLBACK_CAPTION = "Saved from Instagram"

# Crawlers Instagram serves server-rendered og:video tags to
VIDEO_USER_AGENTS: tuple[str, ...] = (
    "facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)",
    "Twitterbot/1.0",
    "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
)

REEL_PATH_PATTERN = re.compile(r"/reels?/", re.IGNORECASE)


def is_instagram_reel(url: str) -> bool:
    """True when the URL path points at a reel rather than a post."""
    return bool(REEL_PATH_PATTERN.search(urlparse(url or "").path))


def synthesize_title(caption: str, author: str, reel: bool) -> str:
    """
    Pick a title for an Instagram item.

    A caption that reads like text (longer than 3 chars and not a bare
    shortcode) is used directly, cut to 100 chars. Otherwise the title is
    ``"{author}'s Reel"`` / ``"{author}'s Post"``, or ``"Instagram Reel"`` /
    ``"Instagram Post"`` when the author is unknown too.
    """
    caption = (caption or "").strip()
    if len(caption) > 3 and not is_bare_slug(caption):
        return caption[:TITLE_MAX_LENGTH]

    kind = "Reel" if reel else "Post"
    if author:
        return f"{author}'s {kind}"
    return f"Instagram {kind}"


def build_embed_url(url: str, reel: bool) -> str | None:
    """``<post url>/embed`` for posts; ``None`` for reels."""
    if reel:
        return None
    parsed = urlparse(url)
    path = parsed.path.rstrip("/") + "/embed"
    return urlunparse((parsed.scheme or "https", parsed.netloc, path, "", "", ""))


class InstagramExtractor(ContentExtractor):
    """Extracts Instagram posts and reels."""

    platform = Platform.INSTAGRAM

    def __init__(
        self,
        http: HttpClient,
        scraper: MetaTagScraper,
        media_resolver: MediaResolver | None = None,
    ) -> None:
        super().__init__(http, scraper)
        self.media_resolver = media_resolver or NullMediaResolver()

    async def extract(self, url: str) -> ExtractedContent:
        reel = is_instagram_reel(url)

        try:
            content = await self._from_oembed(url)
        except ExtractionError as e:
            logger.warning(f"Instagram oEmbed failed, falling back to meta tags: {e}")
            content = await self._from_meta_tags(url)
            video_url = content.video_url or await self.resolve_video_url(url)
        else:
            if not content.caption or not content.thumbnail:
                _, video_url = await asyncio.gather(
                    self._fill_gaps(url, content),
                    self.resolve_video_url(url),
                )
            else:
                video_url = await self.resolve_video_url(url)

        content.title = synthesize_title(content.caption, content.author, reel)
        content.embed_url = build_embed_url(url, reel)
        content.video_url = video_url
        if not content.caption:
            content.caption = FALLBACK_CAPTION
        return content

    async def _from_oembed(self, url: str) -> ExtractedContent:
        data = await self.http.get_json(INSTAGRAM_OEMBED_ENDPOINT, params={"url": url})

        caption = data.get("title") or ""
        thumbnail = data.get("thumbnail_url") or ""
        author = data.get("author_name") or ""
        if not (caption or thumbnail or author):
            raise OEmbedError("Instagram oEmbed response had no caption, thumbnail or author")

        return ExtractedContent(caption=caption, thumbnail=thumbnail, author=author, raw_data=data)

    async def _fill_gaps(self, url: str, content: ExtractedContent) -> None:
        """Copy missing caption/thumbnail/author from meta tags without touching present ones."""
        try:
            scraped = await self.scraper.try_scrape(url)
        except FetchError as e:
            logger.debug(f"Gap-fill scrape failed: {e}")
            return

        if not content.caption:
            content.caption = scraped.caption
        if not content.thumbnail:
            content.thumbnail = scraped.thumbnail
        if not content.author:
            content.author = scraped.author

    async def _from_meta_tags(self, url: str) -> ExtractedContent:
        try:
            scraped = await self.scraper.try_scrape(url)
        except FetchError as e:
            logger.info(f"Instagram meta scrape failed too: {e}")
            return ExtractedContent(raw_data={})

        if scraped.title == UNTITLED:
            scraped.title = ""
        return scraped

    async def resolve_video_url(self, url: str) -> str:
        """Try crawler-visible video tags first, then the media resolver."""
        for user_agent in VIDEO_USER_AGENTS:
            video_url = await self.scraper.scrape_video_url(url, user_agent)
            if video_url:
                return video_url

        resolved = await self.media_resolver.resolve(url)
        return resolved or ""
