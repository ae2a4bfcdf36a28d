"""Tests for reviewlinks.safety — href allow-list."""

from __future__ import annotations

import pytest

from reviewlinks.errors import LinkifyError, UnsafeUrlError
from reviewlinks.safety import is_safe_url, sanitize_url


class TestIsSafeUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "http://example.com",
            "HTTPS://example.com/a?b=c",
            "mailto:alice@example.com",
            "/bugs/123",
            "relative/path",
            "?q=status:open",
            "#anchor",
            "",
        ],
    )
    def test_allowed(self, url):
        assert is_safe_url(url)

    @pytest.mark.parametrize(
        "url",
        ["javascript:alert(1)", "data:text/html,x", "ftp://example.com", "vbscript:x"],
    )
    def test_refused(self, url):
        assert not is_safe_url(url)


class TestSanitizeUrl:
    def test_safe_url_returned(self):
        assert sanitize_url("/c/42") == "/c/42"

    def test_unsafe_url_raises(self):
        with pytest.raises(UnsafeUrlError, match="javascript:alert"):
            sanitize_url("javascript:alert(1)")

    def test_unsafe_url_is_linkify_error(self):
        with pytest.raises(LinkifyError):
            sanitize_url("javascript:alert(1)")
