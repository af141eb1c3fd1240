"""
Meta-Tag Scraper Service for Social Saver

Universal fallback for every platform: fetches a page with a crawler user
agent (sites serve their Open Graph tags to crawlers even when the human
page is rendered client-side) and reads link-preview metadata with
BeautifulSoup.

Field priority:
- title:     og:title -> twitter:title -> <title>
- caption:   og:description -> twitter:description -> description
- thumbnail: og:image -> twitter:image
- video:     og:video:secure_url -> og:video -> twitter:player:stream
- author:    author -> article:author

``scrape`` never raises; any failure yields the degraded record built from
the URL slug.
"""

import logging

from bs4 import BeautifulSoup

from app.models.content import ExtractedContent
from app.utils.http import FetchError, HttpClient, create_http_client
from app.utils.title_utils import slug_title


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

BOT_USER_AGENT: str = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"

BOT_HEADERS: dict[str, str] = {
    "User-Agent": BOT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

UNTITLED: str = "Untitled"
DEGRADED_CAPTION: str = "Saved from the web"
UNPARSEABLE_URL_TITLE: str = "Saved Link"

TITLE_KEYS: tuple[str, ...] = ("og:title", "twitter:title")
DESCRIPTION_KEYS: tuple[str, ...] = ("og:description", "twitter:description", "description")
IMAGE_KEYS: tuple[str, ...] = ("og:image", "twitter:image")
VIDEO_KEYS: tuple[str, ...] = ("og:video:secure_url", "og:video", "twitter:player:stream")
AUTHOR_KEYS: tuple[str, ...] = ("author", "article:author")


# =============================================================================
# PARSING
# =============================================================================


def _meta_content(soup: BeautifulSoup, keys: tuple[str, ...]) -> str:
    """Return the first non-empty ``content`` of a meta tag matching any key by property or name."""
    for key in keys:
        for attr in ("property", "name"):
            tag = soup.find("meta", attrs={attr: key})
            if tag and tag.get("content") and tag["content"].strip():
                return tag["content"].strip()
    return ""


def parse_meta(html: str) -> dict[str, str]:
    """
    Pull link-preview fields out of an HTML document.

    Returns:
        Dictionary with ``title``, ``description``, ``image``, ``video`` and
        ``author``; missing fields are empty strings.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title = _meta_content(soup, TITLE_KEYS)
    if not title and soup.title and soup.title.string:
        title = soup.title.string.strip()

    return {
        "title": title,
        "description": _meta_content(soup, DESCRIPTION_KEYS),
        "image": _meta_content(soup, IMAGE_KEYS),
        "video": _meta_content(soup, VIDEO_KEYS),
        "author": _meta_content(soup, AUTHOR_KEYS),
    }


def degraded_record(url: str) -> ExtractedContent:
    """Floor record used when a page cannot be fetched or parsed."""
    return ExtractedContent(
        title=slug_title(url) or UNPARSEABLE_URL_TITLE,
        caption=DEGRADED_CAPTION,
        raw_data={},
    )


# =============================================================================
# SCRAPER
# =============================================================================


class MetaTagScraper:
    """
    Fetches pages and converts their meta tags into ``ExtractedContent``.

    Example:
        >>> scraper = MetaTagScraper()
        >>> content = await scraper.scrape("https://blog.example.com/post")
    """

    def __init__(self, http: HttpClient | None = None) -> None:
        self.logger = logging.getLogger(__name__)
        self.http = http or create_http_client()

    async def fetch_meta(self, url: str, user_agent: str = BOT_USER_AGENT) -> dict[str, str]:
        """
        Fetch ``url`` and parse its meta tags.

        Raises:
            FetchError: If the page could not be retrieved.
        """
        headers = {**BOT_HEADERS, "User-Agent": user_agent}
        html = await self.http.get_text(url, headers=headers)
        return parse_meta(html)

    async def try_scrape(self, url: str) -> ExtractedContent:
        """
        Scrape ``url`` without the degraded fallback.

        Raises:
            FetchError: If the page could not be retrieved.
        """
        meta = await self.fetch_meta(url)
        return ExtractedContent(
            title=meta["title"] or UNTITLED,
            caption=meta["description"],
            thumbnail=meta["image"],
            video_url=meta["video"],
            author=meta["author"],
            raw_data={
                "title": meta["title"],
                "description": meta["description"],
                "image": meta["image"],
            },
        )

    async def scrape(self, url: str) -> ExtractedContent:
        """Scrape ``url``, returning the degraded record on any failure."""
        try:
            return await self.try_scrape(url)
        except FetchError as e:
            self.logger.warning(f"Meta scrape failed, using URL-derived record: {e}")
        except Exception:
            self.logger.exception(f"Unexpected error scraping {url}")
        return degraded_record(url)

    async def scrape_image(self, url: str) -> str:
        """Return only the preview image URL, or an empty string."""
        try:
            meta = await self.fetch_meta(url)
        except FetchError as e:
            self.logger.debug(f"Image scrape failed: {e}")
            return ""
        return meta["image"]

    async def scrape_video_url(self, url: str, user_agent: str) -> str:
        """Return a video meta tag value as seen by ``user_agent``, or an empty string."""
        try:
            meta = await self.fetch_meta(url, user_agent=user_agent)
        except FetchError as e:
            self.logger.debug(f"Video meta scrape failed: {e}")
            return ""
        return meta["video"]
