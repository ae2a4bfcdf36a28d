"""Watchdog-based live preview: re-render a file whenever it changes."""

from __future__ import annotations

import logging
import signal
import threading
import time
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler, FileSystemMovedEvent
from watchdog.observers import Observer

from .config import Config
from .runner import render_file

log = logging.getLogger(__name__)

_DEBOUNCE_SECONDS = 0.5


class _InputEventHandler(FileSystemEventHandler):
    """Watches for modifications to the input text file."""

    def __init__(
        self,
        config: Config,
        input_path: Path,
        output_path: Path,
        fmt: str,
        *,
        dry_run: bool = False,
    ):
        super().__init__()
        self._config = config
        self._input_path = input_path
        self._output_path = output_path
        self._fmt = fmt
        self._dry_run = dry_run
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def on_modified(self, event: FileSystemEvent) -> None:  # type: ignore[override]
        self._handle(event, str(event.src_path))

    def on_created(self, event: FileSystemEvent) -> None:  # type: ignore[override]
        self._handle(event, str(event.src_path))

    def on_moved(self, event: FileSystemMovedEvent) -> None:  # type: ignore[override]
        # Editors that save atomically rename a temp file over the input
        self._handle(event, str(event.dest_path))

    def _handle(self, event: FileSystemEvent, path: str) -> None:
        if event.is_directory:
            return
        if Path(path).name != self._input_path.name:
            return

        log.debug("Input changed, scheduling render in %.1fs", _DEBOUNCE_SECONDS)
        self._schedule_render()

    def _schedule_render(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(_DEBOUNCE_SECONDS, self._do_render)
            self._timer.daemon = True
            self._timer.start()

    def _do_render(self) -> None:
        try:
            render_file(
                self._config,
                self._input_path,
                self._output_path,
                self._fmt,
                dry_run=self._dry_run,
            )
        except Exception:
            log.error("Render of %s failed", self._input_path, exc_info=True)


def watch(
    config: Config,
    input_path: Path,
    output_path: Path,
    fmt: str = "html",
    *,
    dry_run: bool = False,
) -> None:
    """Render ``input_path`` now and again on every change. Blocks until interrupted."""
    if not input_path.is_file():
        log.error("Input file does not exist: %s", input_path)
        raise SystemExit(1)

    log.info("Running initial render...")
    render_file(config, input_path, output_path, fmt, dry_run=dry_run)

    handler = _InputEventHandler(config, input_path, output_path, fmt, dry_run=dry_run)
    observer = Observer()
    observer.schedule(handler, str(input_path.resolve().parent), recursive=False)

    stop_event = threading.Event()

    def _shutdown(signum: int, frame: object) -> None:
        sig_name = signal.Signals(signum).name
        log.info("Received %s, shutting down...", sig_name)
        stop_event.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    observer.start()
    log.info("Watching %s for changes (Ctrl+C to stop)", input_path)

    try:
        while not stop_event.is_set():
            time.sleep(1)
    finally:
        observer.stop()
        observer.join()
        log.info("Watcher stopped")
