# Area: Shared
"""
bb_engine._shared.logging_formatters — Logging formatters and filters
=====================================================================

Engine log calls attach the season position through ``extra=``::

    logger.info("Evicted p3", extra=log_context(state.week, state.phase.value))

Both formatters render it: the terminal as a ``[W3 live_vote]`` prefix,
the JSON file as ``week`` and ``phase`` keys. Records without a
position are formatted as plain lines.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Optional

# Flag to control narrative-only terminal output
_narrative_mode_enabled = False


def log_context(week: int, phase: Optional[str] = None) -> Dict[str, object]:
    """``extra=`` payload tagging a record with its week and phase."""
    return {"bb_week": week, "bb_phase": phase}


def _position(record: logging.LogRecord) -> Optional[str]:
    week = getattr(record, "bb_week", None)
    if week is None:
        return None
    phase = getattr(record, "bb_phase", None)
    return f"W{week} {phase}" if phase else f"W{week}"


class NarrativeModeFilter(logging.Filter):
    """Keep the terminal quiet while the CLI prints the season feed.

    Only WARNING and above get through in narrative mode; the file
    handler is unaffected.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not _narrative_mode_enabled:
            return True
        return record.levelno >= logging.WARNING


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        position = _position(record)
        if position:
            record.msg = f"[{position}] {record.getMessage()}"
            record.args = None
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """JSON-lines formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        week = getattr(record, "bb_week", None)
        if week is not None:
            log_data["week"] = week
            log_data["phase"] = getattr(record, "bb_phase", None)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def enable_narrative_mode() -> None:
    global _narrative_mode_enabled
    _narrative_mode_enabled = True


def disable_narrative_mode() -> None:
    global _narrative_mode_enabled
    _narrative_mode_enabled = False
