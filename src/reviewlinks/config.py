"""Configuration loading and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .engine import compile_pattern
from .models import CommentLinkPattern

_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "reviewlinks"
_DEFAULT_CONFIG_PATH = _DEFAULT_CONFIG_DIR / "config.yaml"
_BASE_URL_ENV = "REVIEWLINKS_BASE_URL"


def _site_path_prefix_from_env() -> str:
    return os.environ.get(_BASE_URL_ENV, "").rstrip("/")


@dataclass
class Config:
    comment_links: dict[str, CommentLinkPattern] = field(default_factory=dict)
    remove_zero_width_space: bool = False
    site_path_prefix: str = field(default_factory=_site_path_prefix_from_env)


def parse_comment_links(raw: object) -> dict[str, CommentLinkPattern]:
    """Build patterns from a ``commentlinks`` mapping, keeping declaration order."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("'commentlinks' must be a mapping of name -> pattern")

    patterns: dict[str, CommentLinkPattern] = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise ValueError(f"commentlink {name!r} must be a mapping")
        if not entry.get("match"):
            raise ValueError(f"commentlink {name!r} is missing 'match'")

        enabled = entry.get("enabled")
        if enabled is None:
            enabled = True
        if not isinstance(enabled, bool):
            raise ValueError(f"commentlink {name!r} 'enabled' must be true or false, got {enabled!r}")

        pattern = CommentLinkPattern(
            match=str(entry["match"]),
            link=entry.get("link"),
            html=entry.get("html"),
            enabled=enabled,
        )
        if pattern.enabled:
            if not pattern.has_template:
                raise ValueError(f"commentlink {name!r} doesn't contain a link or html attribute")
            compile_pattern(str(name), pattern)
        patterns[str(name)] = pattern

    return patterns


def load_config(config_path: Path | None = None) -> Config:
    """Load config from a YAML (or JSON) file."""
    path = config_path or _DEFAULT_CONFIG_PATH
    path = Path(path).expanduser()

    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            f"Create one at {_DEFAULT_CONFIG_PATH} or pass --config.\n"
            f"See config.example.yaml for reference."
        )

    raw = yaml.safe_load(path.read_text())
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"Invalid config file: {path}")

    kwargs: dict = {"comment_links": parse_comment_links(raw.get("commentlinks"))}
    if "remove_zero_width_space" in raw:
        kwargs["remove_zero_width_space"] = bool(raw["remove_zero_width_space"])
    if raw.get("site_path_prefix") is not None:
        kwargs["site_path_prefix"] = str(raw["site_path_prefix"]).rstrip("/")

    return Config(**kwargs)
