"""
Twitter/X extraction via the publish.twitter.com oEmbed endpoint.

oEmbed returns the tweet as an HTML blockquote; the first paragraph is the
tweet text. It has no image, so the thumbnail comes from a separate meta
scrape. When oEmbed fails the page's meta tags are used, and when those fail
too the record is built from the handle in the URL.
"""

import logging
import re

from bs4 import BeautifulSoup

from app.models.content import ExtractedContent, Platform
from app.services.extractors.base import TITLE_MAX_LENGTH, ContentExtractor, OEmbedError
from app.services.meta_scraper import UNTITLED
from app.utils.http import ExtractionError, FetchError


logger = logging.getLogger(__name__)

TWITTER_OEMBED_ENDPOINT = "https://publish.twitter.com/oembed"

FALLBACK_CAPTION = "Saved tweet from Twitter/X"

# Any subdomain of x.com or twitter.com (www., mobile.)
X_HOST_PATTERN = re.compile(r"^https?://(?:[\w-]+\.)?(?:x|twitter)\.com", re.IGNORECASE)
HANDLE_PATTERN = re.compile(r"(?:twitter\.com|x\.com)/([^/?#]+)", re.IGNORECASE)


def to_twitter_url(url: str) -> str:
    """Rewrite x.com and subdomain links to twitter.com, which the oEmbed endpoint accepts."""
    return X_HOST_PATTERN.sub("https://twitter.com", url)


def twitter_handle(url: str) -> str:
    match = HANDLE_PATTERN.search(url or "")
    return f"@{match.group(1)}" if match else "unknown"


def tweet_text_from_html(html: str) -> str:
    """Plain text of the first ``<p>`` in an oEmbed HTML fragment."""
    paragraph = BeautifulSoup(html or "", "html.parser").find("p")
    return paragraph.get_text().strip() if paragraph else ""


class TwitterExtractor(ContentExtractor):
    """Extracts tweets from twitter.com and x.com links."""

    platform = Platform.TWITTER

    async def extract(self, url: str) -> ExtractedContent:
        try:
            return await self._from_oembed(url)
        except ExtractionError as e:
            logger.warning(f"Twitter oEmbed failed: {e}")

        handle = twitter_handle(url)
        try:
            scraped = await self.scraper.try_scrape(url)
        except FetchError as e:
            logger.info(f"Twitter meta scrape failed, using handle-only record: {e}")
            return ExtractedContent(
                title=f"Tweet by {handle}",
                caption=FALLBACK_CAPTION,
                author=handle,
                embed_url=url,
                raw_data={},
            )

        if scraped.title == UNTITLED:
            scraped.title = f"Tweet by {handle}"
        scraped.author = scraped.author or handle
        scraped.video_url = ""
        scraped.embed_url = url
        return scraped

    async def _from_oembed(self, url: str) -> ExtractedContent:
        data = await self.http.get_json(TWITTER_OEMBED_ENDPOINT, params={"url": to_twitter_url(url)})
        if not data.get("html"):
            raise OEmbedError("Twitter oEmbed response had no html")

        text = tweet_text_from_html(data["html"])
        thumbnail = await self.scraper.scrape_image(url)

        return ExtractedContent(
            title=text[:TITLE_MAX_LENGTH] or "Tweet",
            caption=text,
            author=data.get("author_name") or "",
            thumbnail=thumbnail,
            embed_url=url,
            raw_data=data,
        )
