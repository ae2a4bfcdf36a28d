"""Tests for reviewlinks.models — value types and emissions."""

from __future__ import annotations

import dataclasses

import pytest

from reviewlinks.models import (
    CommentLinkPattern,
    Emission,
    Html,
    Link,
    MatchCandidate,
    Text,
    UrlChunk,
)


class TestCommentLinkPattern:
    def test_defaults(self):
        p = CommentLinkPattern(match="x", link="/x")
        assert p.enabled is True
        assert p.html is None

    def test_has_template(self):
        assert CommentLinkPattern(match="x", link="/x").has_template
        assert CommentLinkPattern(match="x", html="<b>x</b>").has_template
        assert not CommentLinkPattern(match="x").has_template

    def test_frozen(self):
        p = CommentLinkPattern(match="x", link="/x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.link = "/y"  # type: ignore[misc]


class TestNodes:
    def test_equality(self):
        assert Text("a") == Text("a")
        assert Link("a", "/a") != Link("a", "/b")
        assert Html("<b>") != Text("<b>")

    def test_candidate_end(self):
        assert MatchCandidate(3, 4, Text("x")).end == 7

    def test_url_chunk_default_href(self):
        assert UrlChunk("plain").href is None


class TestEmission:
    def test_fragment_nodes(self):
        e = Emission(fragment=(Text("a"), Link("b", "/b")))
        assert e.nodes() == [Text("a"), Link("b", "/b")]

    def test_link_pair(self):
        e = Emission(text="http://x.com", href="http://x.com")
        assert e.nodes() == [Link("http://x.com", "http://x.com")]

