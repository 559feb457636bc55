"""Shared infrastructure: logging and the narrative feed."""

from .logging_config import setup_logging
from .logging_formatters import (
    JSONFormatter,
    NarrativeModeFilter,
    TerminalFormatter,
    disable_narrative_mode,
    enable_narrative_mode,
    log_context,
)
from .narrative import NarrativeEvent, NarrativeLog

__all__ = [
    "setup_logging",
    "JSONFormatter",
    "NarrativeModeFilter",
    "TerminalFormatter",
    "enable_narrative_mode",
    "disable_narrative_mode",
    "log_context",
    "NarrativeEvent",
    "NarrativeLog",
]
