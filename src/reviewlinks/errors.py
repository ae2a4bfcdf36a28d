"""Errors raised while linkifying text."""

from __future__ import annotations


class LinkifyError(ValueError):
    """Base class for fatal linkification errors."""


class PatternConfigError(LinkifyError):
    """A comment-link pattern cannot be used as configured."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"commentlink {name!r} {reason}")
        self.name = name


class UnsafeUrlError(LinkifyError):
    """An href was refused by the URL allow-list."""

    def __init__(self, url: str):
        super().__init__(f"URL not marked as safe: {url}")
        self.url = url
