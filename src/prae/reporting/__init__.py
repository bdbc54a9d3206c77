"""Output backends for progress, status and summary lines.

The CLI installs one reporter per run (``-r plain|rich|json|silent``); library
code reaches it through :func:`get_reporter` or the ``prae`` logger.
"""

from .base import (
    STAT_KEYS,
    Reporter,
    TaskRecord,
    TaskStatus,
    color_enabled,
    get_reporter,
    get_verbosity,
    set_reporter,
    set_verbosity,
    task,
)
from .jsonl import JsonLinesReporter, parse_summary
from .plain import PlainReporter
from .rich_reporter import RichReporter
from .silent import SilentReporter

__all__ = [
    "STAT_KEYS",
    "Reporter",
    "TaskRecord",
    "TaskStatus",
    "color_enabled",
    "get_reporter",
    "set_reporter",
    "get_verbosity",
    "set_verbosity",
    "task",
    "parse_summary",
    "PlainReporter",
    "RichReporter",
    "JsonLinesReporter",
    "SilentReporter",
]
