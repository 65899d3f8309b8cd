"""
namedlog/core/sinks.py
----------------------
Output destinations. A FileSink is owned by exactly one handle and appends
to one file; the ConsoleSink is shared by every handle and never closed.
Both write through a ``logging.StreamHandler`` so line layout is a
``logging.Formatter`` concern.
"""

from __future__ import annotations
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import IO

from namedlog.audit.logger import get_logger
from namedlog.core.levels import SplitPolicy

logger = get_logger(__name__)

DATE_FMT = "%Y/%m/%d %H:%M:%S"
FILE_FMT = "%(asctime)s [%(levelname)s] %(message)s"
CONSOLE_FMT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


class LocalFileSystem:
    """File-system capability used by the loader and the file sinks."""

    def open_append(self, path: str) -> IO[str]:
        # create if absent, append only, readable
        return open(path, "a+", encoding="utf-8")

    def makedirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")


def derive_file_path(log_dir: str, file_base_name: str, split: SplitPolicy, when: datetime) -> str:
    """Log file path for a name at a point in time."""
    if split is SplitPolicy.DAY:
        filename = f"{file_base_name}_{when.year}-{when.month}-{when.day}.log"
    elif split is SplitPolicy.MONTH:
        filename = f"{file_base_name}_{when.year}-{when.month}.log"
    else:
        filename = f"{file_base_name}.log"
    return os.path.join(log_dir, filename)


class _SinkHandler(logging.StreamHandler):
    """StreamHandler that reports write failures as diagnostics."""

    def handleError(self, record: logging.LogRecord) -> None:
        _, exc, _ = sys.exc_info()
        logger.warning(f"Write to log sink failed for '{record.name}': {exc}")


class _ConsoleHandler(_SinkHandler):
    """Always writes to the current sys.stdout, even after it is swapped."""

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stdout


class FileSink:
    def __init__(self, path: str, stream: IO[str]) -> None:
        self.path = path
        self._stream = stream
        self._handler = _SinkHandler(stream)
        self._handler.setFormatter(logging.Formatter(FILE_FMT, datefmt=DATE_FMT))

    @classmethod
    def open(cls, fs: LocalFileSystem, path: str) -> "FileSink":
        """Open the file for appending. OSError propagates to the caller."""
        return cls(path, fs.open_append(path))

    @property
    def closed(self) -> bool:
        return bool(getattr(self._stream, "closed", False))

    def emit(self, record: logging.LogRecord) -> None:
        self._handler.handle(record)

    def close(self) -> None:
        self._handler.close()
        try:
            self._stream.close()
        except OSError as e:
            logger.warning(f"Closing log file {self.path} failed: {e}")


class ConsoleSink:
    """
    Process-wide console stream. With no explicit stream it follows
    sys.stdout; tests pass their own stream.
    """

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._handler = _ConsoleHandler() if stream is None else _SinkHandler(stream)
        self._handler.setFormatter(logging.Formatter(CONSOLE_FMT, datefmt=DATE_FMT))

    def emit(self, record: logging.LogRecord) -> None:
        self._handler.handle(record)
