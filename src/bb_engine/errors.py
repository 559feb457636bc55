"""
bb_engine.errors — Custom exception classes
===========================================

Normal play never raises. Invalid actions are rejected by returning
False and inconsistencies are reported as narrative warnings. The
exceptions below cover programmer errors and bad configuration only.
"""

from __future__ import annotations
from typing import List, Optional


class BBEngineError(Exception):
    """Base exception for all bb_engine errors."""
    pass


class EmptyParticipantsError(BBEngineError, ValueError):
    """Raised when a sampling or resolver helper receives an empty pool."""

    def __init__(self, helper: str):
        self.helper = helper
        super().__init__(f"{helper}() called with an empty participant set")


class ConfigError(BBEngineError, ValueError):
    """Raised when the game configuration fails validation."""

    def __init__(self, source: Optional[str], validation_errors: List[str]):
        self.source = source
        self.validation_errors = validation_errors
        super().__init__(
            f"Invalid configuration ({source or 'defaults'}): {validation_errors}"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="INVALID_CONFIG",
            source=self.source,
            validation_errors=self.validation_errors,
        )


def _format_error_block(
    error_type: str,
    source: Optional[str],
    validation_errors: Optional[List[str]],
) -> str:
    """Format a structured error block for terminal output."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " CONFIGURATION ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Source:       {source or '<defaults/environment>'}",
    ]

    if validation_errors:
        lines.append("-" * 64)
        lines.append(" Validation Errors:")
        for err in validation_errors:
            lines.append(f"   - {err}")

    lines.append("=" * 64)
    lines.append("")
    return "\n".join(lines)
