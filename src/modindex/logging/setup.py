"""
Complete configuration of the structured logging system.

Three independent pipelines:
1. File (JSON) — When config.file is set. Captures everything (DEBUG+).
2. Human handler (stderr) — Only HUMAN events: the indexing report.
3. Technical console (stderr) — WARNING by default, controlled by -v. Excludes HUMAN.

Default behavior (no -v):
- The user sees the HUMAN report plus warnings (symlink loops, ignored files).

With -v (or level: info): adds INFO. With -vv (or level: debug): adds DEBUG.
With --quiet: silences everything.
"""

import logging
import sys
from pathlib import Path

import structlog

from ..config.schema import LoggingConfig
from .human import HumanLogHandler
from .levels import HUMAN


def configure_logging(
    config: LoggingConfig,
    json_output: bool = False,
    quiet: bool = False,
) -> None:
    """Configure the full logging system with three pipelines.

    Args:
        config: Logging configuration (level, file, verbose)
        json_output: If True, disables human and console handlers (--json)
        quiet: If True, disables human and console handlers (--quiet)
    """
    logging.root.handlers.clear()
    structlog.reset_defaults()

    # Root logger captures everything; handlers filter by level
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[],
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    show_human = not quiet and not json_output
    show_console = not quiet and not json_output

    # ── Pipeline 1: JSON file ─────────────────────────────────────────────
    if config.file:
        file_path = Path(config.file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(str(file_path), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=shared_processors,
            )
        )
        logging.root.addHandler(file_handler)

    # ── Pipeline 2: Human handler ─────────────────────────────────────────
    if show_human:
        human_handler = HumanLogHandler(stream=sys.stderr)
        human_handler.setLevel(HUMAN)
        human_handler.addFilter(lambda record: record.levelno == HUMAN)
        logging.root.addHandler(human_handler)

    # ── Pipeline 3: Technical console ─────────────────────────────────────
    if show_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level(config))
        # HUMAN events are already shown by the human handler
        console_handler.addFilter(lambda record: record.levelno != HUMAN)
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(
                    colors=sys.stderr.isatty(),
                ),
                foreign_pre_chain=shared_processors,
            )
        )
        logging.root.addHandler(console_handler)

    # The event dict reaches every handler untouched; each one renders it
    structlog.configure(
        processors=shared_processors + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _verbose_to_level(verbose: int) -> int:
    """Convert the verbose count into a level for the console handler.

    No -v   → WARNING (only problems; the report goes through its own handler)
    -v      → INFO (system operations: config, hierarchy)
    -vv+    → DEBUG (full path lists, per-file decisions)

    Args:
        verbose: Count of -v flags

    Returns:
        Python logging level
    """
    levels = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    return levels.get(verbose, logging.DEBUG)


def console_level(config: LoggingConfig) -> int:
    """Level of the technical console: the more verbose of ``level`` and -v.

    ``level: debug`` or ``level: info`` lower the console to that level even
    without -v; the other levels leave the -v mapping alone.
    """
    level = _verbose_to_level(config.verbose)
    if config.level == "debug":
        return logging.DEBUG
    if config.level == "info":
        return min(level, logging.INFO)
    return level
