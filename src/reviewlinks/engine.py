"""Linkify engine: bare URLs first, then comment-link patterns on the text between."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping

from .errors import PatternConfigError
from .matcher import CompiledPattern, find_candidates
from .models import CommentLinkPattern, Emission, Link, MatchCandidate, RenderedNode
from .reconstruct import reconstruct
from .resolver import OverlapResolver
from .safety import sanitize_url
from .scanner import scan_urls

log = logging.getLogger(__name__)

# Only these protocols become links; anything before them is a folded-in token
_URL_PROTOCOL_RE = re.compile(r"^(.*?)(https?://|mailto:)", re.IGNORECASE | re.DOTALL)
_ZERO_WIDTH_MARKER_RE = re.compile(r"^(CC|R)=\u200b", re.MULTILINE)
_HASH_ANCHOR_RE = re.compile(r'<a href="#/')
# Python spells named groups (?P<name>...)
_JS_NAMED_GROUP_RE = re.compile(r"\(\?<(?=[A-Za-z_])")

Scanner = Callable[[str], Iterable[tuple[str, str | None]]]
Sink = Callable[..., None]


def compile_pattern(name: str, pattern: CommentLinkPattern) -> CompiledPattern:
    """Normalise one pattern's templates and compile its expression."""
    html = pattern.html
    link = pattern.link
    if html:
        html = _HASH_ANCHOR_RE.sub('<a href="/', html)
    elif link and link.startswith("#"):
        link = link[1:]

    try:
        regex = re.compile(_JS_NAMED_GROUP_RE.sub("(?P<", pattern.match))
    except re.error as e:
        raise PatternConfigError(name, f"has an invalid match expression: {e}") from e

    return CompiledPattern(name=name, regex=regex, link=link, html=html)


def derive_patterns(
    patterns: Mapping[str, CommentLinkPattern] | None,
) -> tuple[CompiledPattern, ...]:
    """Build the enabled patterns, in declaration order, without touching the input."""
    if not patterns:
        return ()
    return tuple(
        compile_pattern(name, pattern)
        for name, pattern in patterns.items()
        if pattern.enabled
    )


class LinkifyEngine:
    """Parse text into links and markup, reporting results through a sink.

    The sink is called either as ``sink(text, href)`` for a bare URL, or as
    ``sink(None, None, fragment)`` with the nodes rebuilt for one chunk of
    plain text. Calls arrive in source order.
    """

    def __init__(
        self,
        patterns: Mapping[str, CommentLinkPattern] | None = None,
        sink: Sink | None = None,
        *,
        remove_zero_width_space: bool = False,
        site_path_prefix: str = "",
        scanner: Scanner = scan_urls,
    ):
        self.patterns = derive_patterns(patterns)
        self.sink = sink
        self.remove_zero_width_space = remove_zero_width_space
        self.site_path_prefix = site_path_prefix.rstrip("/")
        self.scanner = scanner

    def parse(self, text: str | None) -> None:
        """Linkify ``text`` and emit the results.

        Nothing is emitted if processing fails part-way.
        """
        if not text:
            return
        emissions = self.emissions(text)
        if self.sink is None:
            return
        for emission in emissions:
            if emission.fragment is not None:
                self.sink(None, None, list(emission.fragment))
            else:
                self.sink(emission.text, emission.href)

    def emissions(self, text: str | None) -> list[Emission]:
        """Return what parse() would emit, in order."""
        if not text:
            return []

        results: list[Emission] = []
        offset = 0
        chunks = 0
        for chunk, href in self.scanner(text):
            results.extend(self._parse_chunk(chunk, href, offset))
            offset += len(chunk)
            chunks += 1

        log.debug("Linkified %d chars in %d chunk(s), %d emission(s)", len(text), chunks, len(results))
        return results

    def _parse_chunk(self, text: str, href: str | None, offset: int) -> list[Emission]:
        if self.remove_zero_width_space:
            text = _ZERO_WIDTH_MARKER_RE.sub(r"\1=", text)

        if href:
            result = _URL_PROTOCOL_RE.match(href)
            if result:
                emissions: list[Emission] = []
                leading = result.group(1)
                if leading:
                    # A word stuck to the front of the URL: keep it as plain text
                    emissions.append(self._parse_links(leading, (), offset))
                    text = text[len(leading):]
                    href = href[len(leading):]
                if text:
                    emissions.append(Emission(text=text, href=sanitize_url(href)))
                return emissions

        return [self._parse_links(text, self.patterns, offset)]

    def _parse_links(
        self,
        text: str,
        patterns: Iterable[CompiledPattern],
        offset: int,
    ) -> Emission:
        resolver = OverlapResolver()
        for candidate in find_candidates(
            text, patterns, path_prefix=self.site_path_prefix, offset=offset
        ):
            resolver.offer(candidate)

        accepted = [_validated(c) for c in resolver.accepted]
        if accepted or resolver.rejected:
            log.debug(
                "Chunk at %d: %d match(es) accepted, %d overlapping dropped",
                offset, len(accepted), resolver.rejected,
            )
        return Emission(fragment=tuple(reconstruct(text, accepted, offset=offset)))


def _validated(candidate: MatchCandidate) -> MatchCandidate:
    if isinstance(candidate.rendered, Link):
        sanitize_url(candidate.rendered.href)
    return candidate


def linkify(
    text: str | None,
    patterns: Mapping[str, CommentLinkPattern] | None = None,
    *,
    remove_zero_width_space: bool = False,
    site_path_prefix: str = "",
    scanner: Scanner = scan_urls,
) -> list[RenderedNode]:
    """Linkify ``text`` and return the flat list of rendered nodes."""
    engine = LinkifyEngine(
        patterns,
        remove_zero_width_space=remove_zero_width_space,
        site_path_prefix=site_path_prefix,
        scanner=scanner,
    )
    nodes: list[RenderedNode] = []
    for emission in engine.emissions(text):
        nodes.extend(emission.nodes())
    return nodes
