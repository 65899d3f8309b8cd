"""
namedlog/api.py
---------------
Module-level logging calls backed by one process-wide LoggerRegistry.

    from namedlog import api as slog

    slog.set_config_file("conf/log.json")
    slog.infof("payments", "charged %s for %.2f", user, amount)
    slog.error("payments", "refund failed:", exc)
"""

from __future__ import annotations
import threading
from typing import Any, Optional

from namedlog.core.levels import Level
from namedlog.core.registry import LoggerRegistry

_LOCK = threading.Lock()
_REGISTRY: Optional[LoggerRegistry] = None


def get_registry() -> LoggerRegistry:
    """Return the process-wide registry, building it on first use."""
    global _REGISTRY
    if _REGISTRY is not None:
        return _REGISTRY
    with _LOCK:
        if _REGISTRY is None:
            _REGISTRY = LoggerRegistry()
        return _REGISTRY


def set_config_file(path: str) -> None:
    get_registry().set_config_file(path)


def set_level(name: str, level: Any) -> None:
    """Override the level of ``name``; values outside DEBUG..ERROR are ignored."""
    get_registry().set_level(name, level)


# format-string variants

def debugf(name: str, fmt: str, *args: Any) -> None:
    get_registry().log(name, Level.DEBUG, fmt, *args)

def infof(name: str, fmt: str, *args: Any) -> None:
    get_registry().log(name, Level.INFO, fmt, *args)

def warningf(name: str, fmt: str, *args: Any) -> None:
    get_registry().log(name, Level.WARNING, fmt, *args)

def errorf(name: str, fmt: str, *args: Any) -> None:
    get_registry().log(name, Level.ERROR, fmt, *args)


# join-arguments variants

def debug(name: str, *args: Any) -> None:
    get_registry().log_joined(name, Level.DEBUG, *args)

def info(name: str, *args: Any) -> None:
    get_registry().log_joined(name, Level.INFO, *args)

def warning(name: str, *args: Any) -> None:
    get_registry().log_joined(name, Level.WARNING, *args)

def error(name: str, *args: Any) -> None:
    get_registry().log_joined(name, Level.ERROR, *args)
