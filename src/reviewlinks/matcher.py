"""Scan text chunks against comment-link patterns and build match candidates."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

from .errors import PatternConfigError
from .models import Html, Link, MatchCandidate

# $$, $&, $0..$99, $<name>
_TEMPLATE_REF_RE = re.compile(r"\$(?:(\$)|(&)|(\d{1,2})|<([^>]*)>)")
_MARKUP_HREF_RE = re.compile(r'(\bhref=")(/[^"]*)')


@dataclass(frozen=True)
class CompiledPattern:
    """An enabled comment-link pattern, normalised and ready for matching."""

    name: str
    regex: re.Pattern[str]
    link: str | None = None
    html: str | None = None


class PatternMatch(NamedTuple):
    text: str
    captures: tuple[str | None, ...]
    position: int
    named: dict[str, str | None]


class PatternMatches:
    """Restartable iterator over the non-overlapping matches of one pattern.

    Every call to ``iter()`` rescans the text from the start.
    """

    def __init__(self, regex: re.Pattern[str], text: str):
        self._regex = regex
        self._text = text

    def __iter__(self) -> Iterator[PatternMatch]:
        for m in self._regex.finditer(self._text):
            yield PatternMatch(m.group(0), m.groups(), m.start(), m.groupdict())


def expand_template(template: str, match: PatternMatch) -> str:
    """Substitute capture-group references in a link or html template."""

    def _replace(ref: re.Match[str]) -> str:
        if ref.group(1):
            return "$"
        if ref.group(2):
            return match.text

        digits = ref.group(3)
        if digits is not None:
            index, trailing = int(digits), ""
            # "$12" with fewer than 12 groups means "$1" followed by "2"
            if len(digits) == 2 and index > len(match.captures):
                index, trailing = int(digits[0]), digits[1]
            if index == 0:
                return match.text + trailing
            if index > len(match.captures):
                return ref.group(0)
            return (match.captures[index - 1] or "") + trailing

        name = ref.group(4)
        if name in match.named:
            return match.named[name] or ""
        return ref.group(0)

    return _TEMPLATE_REF_RE.sub(_replace, template)


def common_prefix_length(a: str, b: str) -> int:
    """Number of leading characters ``a`` and ``b`` share, compared literally."""
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


def apply_path_prefix(href: str, prefix: str) -> str:
    """Mount a site-relative href under ``prefix`` unless it already is."""
    if prefix and href.startswith("/") and not href.startswith(prefix):
        return prefix + href
    return href


def apply_markup_path_prefix(markup: str, prefix: str) -> str:
    """Apply apply_path_prefix() to every ``href="/..."`` inside markup."""
    if not prefix:
        return markup
    return _MARKUP_HREF_RE.sub(
        lambda m: m.group(1) + apply_path_prefix(m.group(2), prefix),
        markup,
    )


def find_candidates(
    text: str,
    patterns: Iterable[CompiledPattern],
    *,
    path_prefix: str = "",
    offset: int = 0,
) -> Iterator[MatchCandidate]:
    """Yield candidates for every pattern, in declaration then match order.

    Positions are absolute: ``offset`` is where ``text`` starts in the source.
    Raises PatternConfigError for a pattern with neither template.
    """
    for pattern in patterns:
        if not (pattern.html or pattern.link):
            raise PatternConfigError(pattern.name, "doesn't contain a link or html attribute")

        for match in PatternMatches(pattern.regex, text):
            position = offset + match.position

            if pattern.html:
                result = expand_template(pattern.html, match)
                # Leave the echoed start of the match free for other patterns
                shared = common_prefix_length(result, match.text)
                yield MatchCandidate(
                    position + shared,
                    len(match.text) - shared,
                    Html(apply_markup_path_prefix(result[shared:], path_prefix)),
                )
            else:
                if not match.text:
                    continue
                href = apply_path_prefix(expand_template(pattern.link, match), path_prefix)
                yield MatchCandidate(position, len(match.text), Link(match.text, href))
