"""Generic web page extraction: meta tags only."""

from app.models.content import ExtractedContent, Platform
from app.services.extractors.base import ContentExtractor
from app.services.meta_scraper import UNTITLED
from app.utils.title_utils import slug_title


class ArticleExtractor(ContentExtractor):
    """Default extractor for any URL that is not a known social platform."""

    platform = Platform.ARTICLE

    async def extract(self, url: str) -> ExtractedContent:
        content = await self.scraper.scrape(url)
        if not content.title or content.title == UNTITLED:
            content.title = slug_title(url) or UNTITLED
        return content
