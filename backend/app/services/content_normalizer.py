"""
Content Normalizer

Reconciles what the extractor found with what the classifier produced:
picks the final title and forces the category into the closed vocabulary.
Applied after classification regardless of which extractor ran.
"""

import logging

from app.models.content import ClassificationResult, ExtractedContent, Platform
from app.services.classification.vocabulary import UNCATEGORIZED, is_known_category
from app.services.extractors.instagram import is_instagram_reel
from app.utils.title_utils import is_generic_instagram_title, is_placeholder_title


logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


def resolve_title(content: ExtractedContent, classification: ClassificationResult, url: str) -> str:
    """
    Choose the bookmark title.

    - Instagram reels: the classifier's title wins (reels have no native title).
    - Otherwise the extractor's title is kept unless it is a placeholder, in
      which case the classifier's title is used, then ``"Untitled"``.
    - A remaining empty or bare ``"Instagram Reel"``/``"Instagram Post"``
      becomes ``"{author}'s Reel/Post"`` or the classifier's title.
    """
    title = (content.title or "").strip()
    ai_title = (classification.title or "").strip()
    reel = is_instagram_reel(url)

    if content.platform == Platform.INSTAGRAM and reel:
        title = ai_title or title
    elif is_placeholder_title(title):
        title = ai_title or title or UNTITLED

    if not title or is_generic_instagram_title(title):
        if content.author:
            title = f"{content.author}'s {'Reel' if reel else 'Post'}"
        else:
            title = ai_title or UNTITLED

    return title


def resolve_category(category: str | None) -> str:
    """Accept only vocabulary categories; anything else becomes ``Uncategorized``."""
    if is_known_category(category):
        return category
    if category and category != UNCATEGORIZED:
        logger.info(f"Discarding category outside vocabulary: {category!r}")
    return UNCATEGORIZED
