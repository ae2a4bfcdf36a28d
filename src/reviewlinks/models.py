"""Data models for comment-link patterns and rendered output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Union


@dataclass(frozen=True)
class CommentLinkPattern:
    """A configured rule mapping a regular expression to a link or html template."""

    match: str
    link: str | None = None
    html: str | None = None
    enabled: bool = True

    @property
    def has_template(self) -> bool:
        return bool(self.link or self.html)


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Link:
    text: str
    href: str


@dataclass(frozen=True)
class Html:
    """Raw markup produced by an html-template pattern."""

    markup: str


RenderedNode = Union[Text, Link, Html]


@dataclass(frozen=True)
class MatchCandidate:
    """A span of source text claimed by a rendered node."""

    position: int
    length: int
    rendered: RenderedNode

    @property
    def end(self) -> int:
        return self.position + self.length


class UrlChunk(NamedTuple):
    """One piece of scanner output: plain text when href is None."""

    text: str
    href: str | None = None


@dataclass(frozen=True)
class Emission:
    """A single sink invocation.

    Either a ``(text, href)`` pair for a bare URL, or a ``fragment`` holding
    the reconstructed nodes for one chunk.
    """

    text: str | None = None
    href: str | None = None
    fragment: tuple[RenderedNode, ...] | None = None

    def nodes(self) -> list[RenderedNode]:
        if self.fragment is not None:
            return list(self.fragment)
        return [Link(self.text or "", self.href or "")]
