"""
Platform detection for submitted URLs.

Matching is done on the hostname, in order Instagram, Twitter/X, YouTube;
anything else (including unparseable input) is treated as an article.
"""

from urllib.parse import urlparse

from app.models.content import Platform


INSTAGRAM_HOSTS: tuple[str, ...] = ("instagram.com", "instagr.am")
TWITTER_HOSTS: tuple[str, ...] = ("twitter.com", "x.com")
YOUTUBE_HOSTS: tuple[str, ...] = ("youtube.com", "youtu.be")


def _host_matches(host: str, domains: tuple[str, ...]) -> bool:
    return any(host == domain or host.endswith("." + domain) for domain in domains)


def detect_platform(url: str) -> Platform:
    """
    Classify ``url`` by its source platform.

    Subdomains count (``m.youtube.com``, ``www.instagram.com``) but look-alike
    hosts do not (``netflix.com`` is not X).

    Example:
        >>> detect_platform("https://youtu.be/dQw4w9WgXcQ")
        <Platform.YOUTUBE: 'youtube'>
        >>> detect_platform("https://blog.example.com/post")
        <Platform.ARTICLE: 'article'>
    """
    try:
        host = (urlparse((url or "").strip()).hostname or "").lower()
    except ValueError:
        return Platform.ARTICLE

    if _host_matches(host, INSTAGRAM_HOSTS):
        return Platform.INSTAGRAM
    if _host_matches(host, TWITTER_HOSTS):
        return Platform.TWITTER
    if _host_matches(host, YOUTUBE_HOSTS):
        return Platform.YOUTUBE
    return Platform.ARTICLE
