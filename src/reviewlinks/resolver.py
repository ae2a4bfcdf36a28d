"""First-come overlap resolution between match candidates."""

from __future__ import annotations

import logging

from .models import MatchCandidate

log = logging.getLogger(__name__)


def spans_overlap(p1: int, l1: int, p2: int, l2: int) -> bool:
    """Half-open spans overlap when either start lies inside the other span.

    Two zero-length spans at the same position also overlap.
    """
    if p2 <= p1 < p2 + l2 or p1 <= p2 < p1 + l1:
        return True
    return l1 == 0 and l2 == 0 and p1 == p2


class OverlapResolver:
    """Accept candidates in the order offered, dropping any that overlap."""

    def __init__(self) -> None:
        self._accepted: list[MatchCandidate] = []
        self.rejected = 0

    @property
    def accepted(self) -> list[MatchCandidate]:
        return list(self._accepted)

    def overlaps(self, candidate: MatchCandidate) -> bool:
        return any(
            spans_overlap(candidate.position, candidate.length, item.position, item.length)
            for item in self._accepted
        )

    def offer(self, candidate: MatchCandidate) -> bool:
        """Accept ``candidate`` unless an earlier one claimed part of its span."""
        if self.overlaps(candidate):
            log.debug(
                "Dropping %r at %d+%d: overlaps an accepted match",
                candidate.rendered, candidate.position, candidate.length,
            )
            self.rejected += 1
            return False
        self._accepted.append(candidate)
        return True
