"""Default bare-URL scanner: split text into alternating plain and URL chunks."""

from __future__ import annotations

import re
from collections.abc import Iterator

from .models import UrlChunk

_TRAILING_PUNCTUATION = ".,;:!?)]}'\""

# Letters directly before a scheme are folded into the match ("foohttp://x"),
# the same way common linkifiers treat them as part of the scheme name.
_URL_RE = re.compile(
    r"""
    (?P<scheme>[a-z][\w+.-]*://[^\s<>"]+)
    | (?P<mailto>mailto:[^\s<>"]+)
    | (?P<www>www\.[^\s<>"]+)
    | (?P<email>[\w.+-]+@[\w-]+(?:\.[\w-]+)+)
    """,
    re.IGNORECASE | re.VERBOSE,
)


def _href_for(kind: str | None, url: str) -> str:
    match kind:
        case "www":
            return f"http://{url}"
        case "email":
            return f"mailto:{url}"
        case _:
            return url


def _strip_trailing(url: str) -> str:
    """Drop trailing punctuation, keeping a ")" that closes a "(" inside the URL."""
    while url and url[-1] in _TRAILING_PUNCTUATION:
        if url[-1] == ")" and url.count("(") >= url.count(")"):
            break
        url = url[:-1]
    return url


def scan_urls(text: str) -> Iterator[UrlChunk]:
    """Yield chunks covering ``text`` exactly once, in order, with no gaps.

    URL chunks carry the detected href; plain chunks have ``href=None``.
    """
    cursor = 0
    for m in _URL_RE.finditer(text):
        url = _strip_trailing(m.group(0))
        trimmed = _URL_RE.fullmatch(url)
        if trimmed is None:
            continue
        start = m.start()
        if start > cursor:
            yield UrlChunk(text[cursor:start])
        yield UrlChunk(url, _href_for(trimmed.lastgroup, url))
        cursor = start + len(url)

    if cursor < len(text):
        yield UrlChunk(text[cursor:])
