"""Shared fixtures for reviewlinks tests."""

from __future__ import annotations

import pytest

from reviewlinks.config import Config
from reviewlinks.models import CommentLinkPattern


@pytest.fixture
def bug_pattern() -> CommentLinkPattern:
    return CommentLinkPattern(match=r"bug (\d+)", link="/bugs/$1")


@pytest.fixture
def sample_patterns(bug_pattern: CommentLinkPattern) -> dict[str, CommentLinkPattern]:
    return {
        "bug": bug_pattern,
        "change": CommentLinkPattern(match=r"\b(I[0-9a-f]{8})\b", link="#/q/$1"),
        "reviewer": CommentLinkPattern(match=r"^(R|CC)=(\w+)", html="$1=<b>$2</b>"),
        "disabled": CommentLinkPattern(match=r"TODO", link="/todo", enabled=False),
    }


@pytest.fixture
def sample_config(sample_patterns: dict[str, CommentLinkPattern]) -> Config:
    return Config(comment_links=sample_patterns, site_path_prefix="")
