"""
Deterministic keyword classifier.

Last link of the classification chain: fully offline, no randomness, and
never fails. The same input always yields the same title, category, tags
and summary.
"""

import re

from app.models.content import ClassificationResult
from app.services.classification.vocabulary import CATEGORY_KEYWORDS, NOISE_TAGS, UNCATEGORIZED
from app.utils.title_utils import slug_title


SUMMARY_MAX_LENGTH: int = 180
SUMMARY_MIN_WORD_BREAK: int = 100
TITLE_BREAK_MIN: int = 10
TITLE_BREAK_MAX: int = 80
TITLE_MAX_WORDS: int = 8
MAX_HASHTAG_TAGS: int = 4
MAX_KEYWORD_TAGS: int = 3
MAX_TAGS: int = 5

DEFAULT_TITLE = "Saved Content"
ELLIPSIS = "…"

# "12K likes, 41 comments - " at the start of Instagram og:descriptions
ENGAGEMENT_PREFIX_PATTERN = re.compile(
    r"^\d[\d.,KkMm]*\s*(likes?|views?|comments?|shares?)[^-\n]*[-–]\s*",
    re.IGNORECASE,
)
# " on March 3, 2024: " between the author and the caption
DATE_FRAGMENT_PATTERN = re.compile(r"\s+on\s+\w+ \d{1,2},\s*\d{4}:\s*", re.IGNORECASE)
WHITESPACE_PATTERN = re.compile(r"\s+")
SENTENCE_END_PATTERN = re.compile(r"[.!?]")
HASHTAG_PATTERN = re.compile(r"#[a-zA-Z][a-zA-Z0-9_]*")
HASHTAG_BLOCK_PATTERN = re.compile(r"(#\w+\s*){3,}")


def clean_text(text: str) -> str:
    """Strip engagement counts and date fragments, then collapse whitespace."""
    if not text:
        return ""
    text = ENGAGEMENT_PREFIX_PATTERN.sub("", text)
    text = DATE_FRAGMENT_PATTERN.sub(": ", text)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def title_from_text(cleaned: str) -> str:
    """
    Take a title from cleaned caption text.

    Prefers the part before a colon, then the first sentence, when that
    boundary sits between characters 10 and 80; otherwise the first eight
    words. Returns an empty string when nothing useful remains.
    """
    if not cleaned:
        return ""

    colon = cleaned.find(":")
    if TITLE_BREAK_MIN < colon < TITLE_BREAK_MAX:
        return cleaned[:colon].strip()

    sentence_end = SENTENCE_END_PATTERN.search(cleaned)
    if sentence_end and TITLE_BREAK_MIN < sentence_end.start() < TITLE_BREAK_MAX:
        return cleaned[: sentence_end.start()].strip()

    words = " ".join(cleaned.split(" ")[:TITLE_MAX_WORDS])
    return words if len(words) > 3 else ""


def extract_hashtags(text: str) -> list[str]:
    """Lower-cased, noise-filtered, de-duplicated hashtags in order of appearance."""
    hashtags: list[str] = []
    for match in HASHTAG_PATTERN.findall(text or ""):
        tag = match[1:].lower()
        if tag not in NOISE_TAGS and tag not in hashtags:
            hashtags.append(tag)
    return hashtags


def score_categories(haystack: str) -> tuple[str, list[str]]:
    """
    Pick the category with the most keyword hits in ``haystack``.

    Only a strictly higher count replaces the current leader, so ties go to
    the category declared first. No hits at all means ``Uncategorized``.

    Returns:
        Tuple of (category, matched keywords of that category)
    """
    best_category = UNCATEGORIZED
    best_matches: list[str] = []

    for category, keywords in CATEGORY_KEYWORDS.items():
        matches = [keyword for keyword in keywords if keyword in haystack]
        if len(matches) > len(best_matches):
            best_category = category
            best_matches = matches

    return best_category, best_matches


def build_tags(raw_text: str, matched_keywords: list[str]) -> list[str]:
    """Hashtags first, then single-word matched keywords, capped at five."""
    keyword_tags = [k for k in matched_keywords if len(k) > 3 and " " not in k][:MAX_KEYWORD_TAGS]

    tags: list[str] = []
    for tag in extract_hashtags(raw_text)[:MAX_HASHTAG_TAGS] + keyword_tags:
        if tag not in tags:
            tags.append(tag)
    return tags[:MAX_TAGS]


def build_summary(cleaned: str, category: str, platform: str | None) -> str:
    summary = ""
    if cleaned:
        without_hashtags = HASHTAG_BLOCK_PATTERN.sub("", cleaned).strip()
        if len(without_hashtags) <= SUMMARY_MAX_LENGTH:
            summary = without_hashtags
        else:
            cut = without_hashtags[:SUMMARY_MAX_LENGTH]
            last_space = cut.rfind(" ")
            if last_space > SUMMARY_MIN_WORD_BREAK:
                cut = cut[:last_space]
            summary = cut + ELLIPSIS

    if not summary:
        kind = category.lower() if category != UNCATEGORIZED else (platform or "web")
        summary = f"A {kind} post saved from {platform or 'the web'}."
    return summary


def keyword_classify(text: str, platform: str | None = None, url: str | None = None) -> ClassificationResult:
    """
    Classify ``text`` with the keyword table.

    Args:
        text: Raw analysis text (caption, title and URL joined)
        platform: Platform name used in the synthesized summary
        url: Source URL, also scanned for keywords and used for the title fallback

    Example:
        >>> result = keyword_classify("5 minute leg workout for beginners #fitness #legday")
        >>> result.category
        'Fitness'
    """
    cleaned = clean_text(text)
    haystack = f"{cleaned} {url or ''}".lower()

    title = title_from_text(cleaned)
    if not title and url:
        title = slug_title(url, strip_extension=False)
    title = title or DEFAULT_TITLE

    category, matched_keywords = score_categories(haystack)

    return ClassificationResult(
        title=title,
        category=category,
        tags=build_tags(text, matched_keywords),
        summary=build_summary(cleaned, category, platform),
        provider="keyword",
    )
