"""Render linkified node sequences as HTML, plain text, markdown or JSON."""

from __future__ import annotations

import html as html_mod
import html.parser
import json
import re
from collections.abc import Iterable

from .models import Html, Link, RenderedNode, Text


class _MarkupWalker(html.parser.HTMLParser):
    """Reduce markup to its text, optionally keeping anchors as markdown links."""

    def __init__(self, *, keep_links: bool) -> None:
        super().__init__(convert_charrefs=True)
        self._keep_links = keep_links
        self._parts: list[str] = []
        self._href: str | None = None
        self._link_text: list[str] = []
        self._in_link = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        match tag:
            case "a" if self._keep_links:
                self._href = dict(attrs).get("href") or ""
                self._in_link = True
                self._link_text = []
            case "br":
                self._parts.append("\n")

    def handle_endtag(self, tag: str) -> None:
        if tag == "a" and self._in_link:
            text = "".join(self._link_text)
            self._parts.append(f"[{text}]({self._href})")
            self._in_link = False
            self._href = None

    def handle_data(self, data: str) -> None:
        if self._in_link:
            self._link_text.append(data)
        else:
            self._parts.append(data)

    def get_text(self) -> str:
        self.close()
        if self._in_link:
            # Unclosed anchor: keep what we have as plain text
            self._parts.extend(self._link_text)
        return "".join(self._parts)


def markup_to_text(markup: str, *, keep_links: bool = False) -> str:
    """Return the text content of a markup fragment."""
    if "<" not in markup and "&" not in markup:
        return markup
    walker = _MarkupWalker(keep_links=keep_links)
    walker.feed(markup)
    return walker.get_text()


def to_html(nodes: Iterable[RenderedNode]) -> str:
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(text=text):
                parts.append(html_mod.escape(text, quote=False))
            case Link(text=text, href=href):
                parts.append(
                    f'<a href="{html_mod.escape(href)}" target="_blank" rel="noopener">'
                    f"{html_mod.escape(text, quote=False)}</a>"
                )
            case Html(markup=markup):
                parts.append(markup)
    return "".join(parts)


def to_text(nodes: Iterable[RenderedNode]) -> str:
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(text=text) | Link(text=text):
                parts.append(text)
            case Html(markup=markup):
                parts.append(markup_to_text(markup))
    return "".join(parts)


_MARKDOWN_SPECIAL_RE = re.compile(r"([\[\]])")


def to_markdown(nodes: Iterable[RenderedNode]) -> str:
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(text=text):
                parts.append(text)
            case Link(text=text, href=href):
                label = _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)
                parts.append(f"[{label}]({href})")
            case Html(markup=markup):
                parts.append(markup_to_text(markup, keep_links=True))
    return "".join(parts)


def node_to_dict(node: RenderedNode) -> dict:
    match node:
        case Text(text=text):
            return {"type": "text", "text": text}
        case Link(text=text, href=href):
            return {"type": "link", "text": text, "href": href}
        case Html(markup=markup):
            return {"type": "html", "markup": markup}
    raise TypeError(f"Not a rendered node: {node!r}")


def to_json(nodes: Iterable[RenderedNode]) -> str:
    return json.dumps([node_to_dict(n) for n in nodes], indent=2, ensure_ascii=False)


RENDERERS = {
    "html": to_html,
    "text": to_text,
    "markdown": to_markdown,
    "json": to_json,
}
