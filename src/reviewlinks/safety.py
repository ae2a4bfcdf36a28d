"""Allow-list validation for hrefs before they are bound into output."""

from __future__ import annotations

import re

from .errors import UnsafeUrlError

# http(s), mailto, or a relative reference with no scheme before the first / ? #
_SAFE_URL_RE = re.compile(r"^(https?://|mailto:|[^:/?#]*(?:[/?#]|$))", re.IGNORECASE)


def is_safe_url(url: str) -> bool:
    return bool(_SAFE_URL_RE.match(url))


def sanitize_url(url: str) -> str:
    """Return ``url`` if it may be used as an href, else raise UnsafeUrlError."""
    if not is_safe_url(url):
        raise UnsafeUrlError(url)
    return url
