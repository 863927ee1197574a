"""
Shared validators for input sanitization.
"""

import re
import unicodedata
from urllib.parse import urlparse

from shared.config.constants import Limits

# Hosts that must never appear in stored image URLs (SSRF prevention)
BLOCKED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "192.168.",
    "169.254.",
    "[::1]",
    "metadata.google",
]

BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}

MAX_URL_LENGTH = 2048


def validate_image_url(url: str | None) -> str | None:
    """
    Validate and sanitize an image URL (catalog cover images).

    Returns:
        The stripped URL, or None when empty.

    Raises:
        ValueError: If the URL is malformed or points at an internal host.
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if len(url) > MAX_URL_LENGTH:
        raise ValueError(f"URL too long (max {MAX_URL_LENGTH} characters)")

    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"URL scheme not allowed: {scheme}")
    if scheme not in ("http", "https"):
        raise ValueError("Only HTTP/HTTPS URLs are allowed")

    host = parsed.netloc.lower()
    if not host:
        raise ValueError("URL has no host")

    for blocked in BLOCKED_HOSTS:
        if host.startswith(blocked):
            raise ValueError("Internal URLs are not allowed")

    return url


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards. Escaping them stops user input
    from turning a search into a full table scan.
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: str | None, max_length: int = Limits.MAX_SEARCH_TERM_LENGTH) -> str:
    """Trim, truncate and strip control characters from a search term."""
    if not term:
        return ""

    term = term.strip()[:max_length]
    return re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)


def slugify(value: str, max_length: int = Limits.MAX_SLUG_LENGTH) -> str:
    """
    Build a URL slug from a display name.

    Example:
        slugify("Men's Shoes & Sneakers")  # "mens-shoes-sneakers"
    """
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"['\"]", "", value.lower())
    value = re.sub(r"[^a-z0-9]+", "-", value).strip("-")
    return value[:max_length].rstrip("-")
