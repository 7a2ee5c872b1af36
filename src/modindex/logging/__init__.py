"""
Logging module - Structured logging system.

HUMAN level (25), HumanLogHandler and HumanLog helper render the
indexing report; configure_logging wires the structlog pipelines.
"""

from .human import HumanFormatter, HumanLog, HumanLogHandler, files_label
from .levels import HUMAN
from .setup import configure_logging, console_level

__all__ = [
    "configure_logging",
    "console_level",
    "files_label",
    "HUMAN",
    "HumanFormatter",
    "HumanLog",
    "HumanLogHandler",
]
