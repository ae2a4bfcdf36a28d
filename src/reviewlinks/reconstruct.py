"""Rebuild a chunk of text with accepted spans replaced by rendered nodes."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from .models import MatchCandidate, RenderedNode, Text


def reconstruct(
    text: str,
    candidates: Iterable[MatchCandidate],
    *,
    offset: int = 0,
) -> list[RenderedNode]:
    """Return the nodes for ``text`` with each candidate's span replaced.

    Candidates must not overlap. ``offset`` is where ``text`` starts in the
    source the candidate positions refer to.

    Works right to left so a replacement never shifts an offset still to be
    used: everything left of the cursor is untouched original text.
    """
    nodes: deque[RenderedNode] = deque()
    cursor = len(text)

    for candidate in sorted(candidates, key=lambda c: c.position, reverse=True):
        start = candidate.position - offset
        end = start + candidate.length
        if end != cursor:
            nodes.appendleft(Text(text[end:cursor]))
        nodes.appendleft(candidate.rendered)
        cursor = start

    if cursor != 0:
        nodes.appendleft(Text(text[:cursor]))

    return list(nodes)
