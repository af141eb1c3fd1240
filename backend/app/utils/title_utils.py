"""
Title processing utilities for Social Saver.

Shared by the extractors, the keyword classifier and the content normalizer
so that placeholder detection and slug-derived titles behave identically
everywhere.
"""

import re
from urllib.parse import urlparse


# Bare media IDs such as Instagram shortcodes ("Cx7yZ1qLk9W")
BARE_SLUG_PATTERN = re.compile(r"^[A-Za-z0-9_-]{5,20}$")

# Generic titles that carry no information about the content
PLACEHOLDER_PATTERN = re.compile(r"%%|Untitled|Instagram Reel|Instagram Post", re.IGNORECASE)

GENERIC_INSTAGRAM_TITLE_PATTERN = re.compile(r"^Instagram (Reel|Post)$", re.IGNORECASE)

_FILE_EXTENSION_PATTERN = re.compile(r"\.[a-z]+$", re.IGNORECASE)
_WORD_START_PATTERN = re.compile(r"\b\w")


def is_bare_slug(text: str) -> bool:
    """True for a 5-20 character run of letters, digits, ``-`` or ``_`` with no spaces."""
    return bool(BARE_SLUG_PATTERN.match(text or ""))


def is_placeholder_title(title: str | None) -> bool:
    """
    Decide whether a title is junk that should be replaced.

    A title is junk when it is empty, a bare slug, or contains one of the
    generic placeholders (``Untitled``, ``Instagram Reel``, ``Instagram Post``
    or a literal ``%%`` template marker).

    Examples:
        >>> is_placeholder_title("Cx7yZ1qLk9W")
        True
        >>> is_placeholder_title("Sourdough for beginners")
        False
    """
    if not title or not title.strip():
        return True
    title = title.strip()
    return is_bare_slug(title) or bool(PLACEHOLDER_PATTERN.search(title))


def is_generic_instagram_title(title: str | None) -> bool:
    """True for exactly ``Instagram Reel`` or ``Instagram Post`` (any case)."""
    return bool(GENERIC_INSTAGRAM_TITLE_PATTERN.match((title or "").strip()))


def capitalize_words(text: str) -> str:
    """Upper-case the first character of every word, leaving the rest untouched."""
    return _WORD_START_PATTERN.sub(lambda m: m.group().upper(), text)


def slug_title(url: str, strip_extension: bool = True) -> str:
    """
    Build a readable title from the last path segment of ``url``.

    ``-`` and ``_`` become spaces and each word is capitalized; a trailing
    file extension is dropped when ``strip_extension`` is set. Falls back to
    the hostname when the path is empty, and returns an empty string when
    neither exists or the URL cannot be parsed.

    Examples:
        >>> slug_title("https://blog.example.com/how-to-bake-bread")
        'How To Bake Bread'
        >>> slug_title("https://example.com/")
        'example.com'
    """
    try:
        parsed = urlparse(url or "")
    except ValueError:
        return ""
    segments = [part for part in parsed.path.split("/") if part]
    last = segments[-1] if segments else ""

    title = last.replace("-", " ").replace("_", " ")
    if strip_extension:
        title = _FILE_EXTENSION_PATTERN.sub("", title)
    title = capitalize_words(title).strip()

    return title or (parsed.hostname or "")

