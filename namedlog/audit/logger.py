# namedlog/audit/logger.py
from __future__ import annotations
import logging

from namedlog.utils.config import SETTINGS

_ROOT_NAME = "namedlog"

_INITIALIZED = False

def initialize_logging(level: str | int = SETTINGS.diag_level) -> None:
    """
    Configure the facility's own diagnostics logger with a console handler.
    Idempotent: safe to call multiple times.
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.WARNING))
    # keep diagnostics off the host's root handlers
    root.propagate = False

    ch = logging.StreamHandler()
    ch.setLevel(root.level)
    ch.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))

    root.addHandler(ch)
    _INITIALIZED = True

def get_logger(name: str) -> logging.Logger:
    if not _INITIALIZED:
        initialize_logging()
    return logging.getLogger(name)
