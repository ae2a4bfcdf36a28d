"""Orchestrator: read text -> linkify -> render -> write."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import Config
from .engine import LinkifyEngine
from .models import RenderedNode
from .render import RENDERERS

log = logging.getLogger(__name__)


def build_engine(config: Config) -> LinkifyEngine:
    return LinkifyEngine(
        config.comment_links,
        remove_zero_width_space=config.remove_zero_width_space,
        site_path_prefix=config.site_path_prefix,
    )


def linkify_text(config: Config, text: str) -> list[RenderedNode]:
    """Linkify ``text`` with the patterns and options from ``config``."""
    nodes: list[RenderedNode] = []
    for emission in build_engine(config).emissions(text):
        nodes.extend(emission.nodes())
    return nodes


def render_text(config: Config, text: str, fmt: str = "html") -> str:
    try:
        renderer = RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown output format: {fmt!r}") from None
    return renderer(linkify_text(config, text))


def write_output(output_path: Path, rendered: str, *, dry_run: bool = False) -> None:
    if dry_run:
        log.info("[DRY RUN] Would write %s (%d chars)", output_path, len(rendered))
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered, encoding="utf-8")
    log.info("Wrote %s (%d chars)", output_path, len(rendered))


def render_file(
    config: Config,
    input_path: Path,
    output_path: Path | None = None,
    fmt: str = "html",
    *,
    dry_run: bool = False,
) -> str:
    """Render one file. Writes ``output_path`` unless it is None. Returns the output."""
    text = input_path.read_text(encoding="utf-8")
    rendered = render_text(config, text, fmt)
    if output_path is not None:
        write_output(output_path, rendered, dry_run=dry_run)
    return rendered
