"""Tests for reviewlinks.config — Config dataclass and load_config()."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from reviewlinks.config import Config, load_config, parse_comment_links
from reviewlinks.models import CommentLinkPattern


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("REVIEWLINKS_BASE_URL", raising=False)
        cfg = Config()
        assert cfg.comment_links == {}
        assert cfg.remove_zero_width_space is False
        assert cfg.site_path_prefix == ""

    def test_prefix_from_env(self, monkeypatch):
        monkeypatch.setenv("REVIEWLINKS_BASE_URL", "/r/")
        assert Config().site_path_prefix == "/r"


class TestParseCommentLinks:
    def test_none(self):
        assert parse_comment_links(None) == {}

    def test_order_and_fields(self):
        patterns = parse_comment_links({
            "b": {"match": "b(\\d)", "link": "/b/$1"},
            "a": {"match": "a", "html": "<i>a</i>", "enabled": False},
        })
        assert list(patterns) == ["b", "a"]
        assert patterns["b"] == CommentLinkPattern(match="b(\\d)", link="/b/$1")
        assert patterns["a"].enabled is False

    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            parse_comment_links(["x"])

    def test_entry_not_a_mapping(self):
        with pytest.raises(ValueError, match="'x' must be a mapping"):
            parse_comment_links({"x": "y"})

    def test_missing_match(self):
        with pytest.raises(ValueError, match="missing 'match'"):
            parse_comment_links({"x": {"link": "/x"}})

    def test_missing_templates(self):
        with pytest.raises(ValueError, match="link or html"):
            parse_comment_links({"x": {"match": "x"}})

    def test_missing_templates_disabled_ok(self):
        patterns = parse_comment_links({"x": {"match": "x", "enabled": False}})
        assert patterns["x"].has_template is False


class TestLoadConfig:
    def test_minimal_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("REVIEWLINKS_BASE_URL", raising=False)
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("commentlinks:\n  bug:\n    match: 'bug (\\d+)'\n    link: /bugs/$1\n")
        cfg = load_config(cfg_file)
        assert cfg.comment_links["bug"].link == "/bugs/$1"
        assert cfg.remove_zero_width_space is False
        assert cfg.site_path_prefix == ""

    def test_full_yaml(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            "remove_zero_width_space: true\n"
            "site_path_prefix: /r/\n"
            "commentlinks:\n"
            "  reviewer:\n"
            "    match: '^(R|CC)=(\\w+)'\n"
            "    html: '$1=<b>$2</b>'\n"
        )
        cfg = load_config(cfg_file)
        assert cfg.remove_zero_width_space is True
        assert cfg.site_path_prefix == "/r"
        assert cfg.comment_links["reviewer"].html == "$1=<b>$2</b>"

    def test_json_export(self, tmp_path):
        cfg_file = tmp_path / "config.json"
        cfg_file.write_text('{"commentlinks": {"bug": {"match": "bug", "link": "/b"}}}')
        cfg = load_config(cfg_file)
        assert list(cfg.comment_links) == ["bug"]

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_yaml_returns_none(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(cfg_file)

    def test_yaml_returns_non_dict(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("- item1\n- item2\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(cfg_file)

    def test_bad_pattern_reported(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("commentlinks:\n  bug:\n    match: bug\n")
        with pytest.raises(ValueError, match="'bug'"):
            load_config(cfg_file)

    def test_config_path_none_uses_default(self):
        with patch.object(Path, "exists", return_value=False):
            with pytest.raises(FileNotFoundError):
                load_config(None)

    def test_bad_regex_reported(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("commentlinks:\n  bad:\n    match: '('\n    link: /x\n")
        with pytest.raises(ValueError, match="'bad' has an invalid match expression"):
            load_config(cfg_file)

    def test_bad_regex_in_disabled_pattern_ignored(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            "commentlinks:\n  bad:\n    match: '('\n    link: /x\n    enabled: false\n"
        )
        assert load_config(cfg_file).comment_links["bad"].enabled is False


class TestEnabledFlag:
    def test_quoted_false_rejected(self):
        with pytest.raises(ValueError, match="'enabled' must be true or false"):
            parse_comment_links({"x": {"match": "x", "link": "/x", "enabled": "false"}})

    def test_number_rejected(self):
        with pytest.raises(ValueError, match="'enabled'"):
            parse_comment_links({"x": {"match": "x", "link": "/x", "enabled": 0}})

    def test_null_means_enabled(self):
        patterns = parse_comment_links({"x": {"match": "x", "link": "/x", "enabled": None}})
        assert patterns["x"].enabled is True

    def test_yaml_booleans(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            "commentlinks:\n"
            "  first:\n    match: a\n    link: /a\n    enabled: true\n"
            "  second:\n    match: b\n    link: /b\n    enabled: no\n"
        )
        links = load_config(cfg_file).comment_links
        assert links["first"].enabled is True
        assert links["second"].enabled is False
