# Area: Shared
"""
bb_engine._shared.logging_config — Structured logging setup
===========================================================

Configures dual logging for the ``bb_engine`` logger tree: colored
terminal output plus an optional JSON-lines file. The engine itself
never calls this; applications and the CLI do.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .logging_formatters import JSONFormatter, NarrativeModeFilter, TerminalFormatter

# Package logger
logger = logging.getLogger("bb_engine")


def setup_logging(
    log_file_path: Optional[str] = None,
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str, optional
        Path to a JSON-lines log file. No file handler when omitted.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("bb_engine")
    pkg_logger.setLevel(level)
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    terminal_handler.addFilter(NarrativeModeFilter())
    pkg_logger.addHandler(terminal_handler)

    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False
