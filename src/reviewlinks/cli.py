"""Command-line interface for reviewlinks."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_config
from .render import RENDERERS
from .runner import render_file, render_text, write_output
from .watcher import watch


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="reviewlinks",
        description="Linkify commit messages and review comments",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Text file to linkify (default: stdin)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to config YAML (default: ~/.config/reviewlinks/config.yaml)",
    )
    parser.add_argument(
        "--format", "-f",
        choices=sorted(RENDERERS),
        default="html",
        help="Output format (default: html)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Write output to this file instead of stdout",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Re-render INPUT into --output whenever it changes",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be written without writing files",
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.watch and (args.input == "-" or args.output is None):
        parser.error("--watch needs an INPUT file and --output")

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from None

    try:
        if args.watch:
            watch(config, Path(args.input), args.output, args.format, dry_run=args.dry_run)
            return
        if args.input == "-":
            rendered = render_text(config, sys.stdin.read(), args.format)
            if args.output is not None:
                write_output(args.output, rendered, dry_run=args.dry_run)
        else:
            rendered = render_file(
                config, Path(args.input), args.output, args.format, dry_run=args.dry_run
            )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from None

    if args.output is None:
        sys.stdout.write(rendered)
