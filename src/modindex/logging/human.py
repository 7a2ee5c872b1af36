"""
Human Log — Formatter and helper for the readable indexing report.

Produces plain output a user can follow while a project is indexed.

Example output:
    Indexing files...
    Project configuration:
      Excluded sources: **/*.tmp
    Indexing files of module 'core'
      Base dir: /work/acme/core
      Source paths: src
      Test paths: tests
    1200 files processed
    1843 files indexed
    12 files ignored because of inclusion/exclusion patterns
"""

import logging
import sys

from .levels import HUMAN


def files_label(count: int) -> str:
    """Return "file" or "files" depending on ``count``."""
    return "file" if count == 1 else "files"


class HumanFormatter:
    """Formatter of indexing report events.

    Converts structured events into readable text with a consistent format.
    Each event type has its own format.
    """

    def format_event(self, event: str, **kw) -> str | None:
        """Format an event into readable text.

        Args:
            event: Event name (e.g.: "indexer.module.start", "progress.tick")
            **kw: Event parameters

        Returns:
            Formatted text, or None if the event has no defined format
        """
        match event:

            # ── PROGRESS ─────────────────────────────────────────────────
            case "progress.start" | "progress.stop":
                return str(kw.get("message", ""))

            case "progress.tick":
                count = kw.get("count", 0)
                line = f"{count} {files_label(count)} processed"
                last = kw.get("last")
                if last:
                    line += f", current file: {last}"
                return line

            # ── PROJECT / MODULES ────────────────────────────────────────
            case "indexer.project_config":
                return "Project configuration:"

            case "indexer.filters":
                indent = kw.get("indent", "")
                label = kw.get("label", "?")
                patterns = kw.get("patterns") or []
                return f"{indent}{label}: {', '.join(patterns)}"

            case "indexer.module.start":
                return f"Indexing files of module '{kw.get('name', '?')}'"

            case "indexer.module.base_dir":
                return f"  Base dir: {kw.get('path', '?')}"

            case "indexer.module.paths":
                return f"{kw.get('label', '')}{kw.get('paths', '')}"

            # ── SUMMARY ──────────────────────────────────────────────────
            case "indexer.excluded":
                count = kw.get("count", 0)
                return (
                    f"{count} {files_label(count)} ignored because of "
                    "inclusion/exclusion patterns"
                )

            case _:
                return None


class HumanLogHandler(logging.Handler):
    """Logging handler that filters HUMAN events and formats them.

    Only processes records at HUMAN level (25). Ignores the rest.
    Writes to stderr so stdout stays clean for --json output.
    """

    def __init__(self, stream=None) -> None:
        super().__init__(level=HUMAN)
        self.stream = stream or sys.stderr
        self.formatter_inst = HumanFormatter()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if record.levelno != HUMAN:
                return

            # structlog's wrap_for_formatter leaves the event dict in msg
            if isinstance(record.msg, dict):
                kw = {
                    k: v for k, v in record.msg.items()
                    if not k.startswith("_") and k not in ("event", "level", "logger", "timestamp")
                }
                event = str(record.msg.get("event", ""))
            else:
                kw = {}
                event = record.getMessage()

            formatted = self.formatter_inst.format_event(event, **kw)
            if formatted is not None:
                self.stream.write(formatted + "\n")
                self.stream.flush()
        except Exception:
            self.handleError(record)


class HumanLog:
    """Typed helper to emit HUMAN level logs from code.

    Instead of calling log.log(HUMAN, "event", ...) directly,
    use methods with clear semantic names.

    Usage:
        hlog = HumanLog(structlog.get_logger())
        hlog.module_start("core")
        hlog.excluded(3)
    """

    def __init__(self, logger) -> None:
        self._log = logger

    def progress_start(self, message: str) -> None:
        self._log.log(HUMAN, "progress.start", message=message)

    def progress_tick(self, count: int, last: str | None = None) -> None:
        self._log.log(HUMAN, "progress.tick", count=count, last=last)

    def progress_stop(self, message: str) -> None:
        self._log.log(HUMAN, "progress.stop", message=message)

    def project_config(self) -> None:
        self._log.log(HUMAN, "indexer.project_config")

    def filters(self, label: str, patterns: list[str], indent: str = "  ") -> None:
        self._log.log(HUMAN, "indexer.filters", label=label, patterns=list(patterns), indent=indent)

    def module_start(self, name: str) -> None:
        self._log.log(HUMAN, "indexer.module.start", name=name)

    def base_dir(self, path: str) -> None:
        self._log.log(HUMAN, "indexer.module.base_dir", path=path)

    def paths(self, label: str, paths: str) -> None:
        self._log.log(HUMAN, "indexer.module.paths", label=label, paths=paths)

    def excluded(self, count: int) -> None:
        self._log.log(HUMAN, "indexer.excluded", count=count)
