import io
import os
import sys
import threading
import time
from datetime import datetime, timedelta

import pytest

# --- Ensure imports always work, even after chdir into tmp dirs ---

# Absolute path to repo root
HERE = os.path.abspath(os.path.dirname(__file__))
ROOT = os.path.abspath(os.path.join(HERE, "..", ".."))

if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from namedlog.core.sinks import ConsoleSink, LocalFileSystem  # noqa: E402


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class _MemoryFile:
    def __init__(self, fs: "MemoryFileSystem", path: str) -> None:
        self.fs = fs
        self.path = path
        self.closed = False

    def write(self, text: str) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        self.fs.files[self.path] = self.fs.files.get(self.path, "") + text
        return len(text)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.fs.events.append(("close", self.path))


class MemoryFileSystem(LocalFileSystem):
    """In-memory stand-in that records every open and close."""

    def __init__(self) -> None:
        self.files = {}
        self.dirs = set()
        self.events = []
        self.opened = []
        self.fail_opens = False
        self.open_delay_s = 0.0
        self._lock = threading.Lock()

    def open_append(self, path: str):
        if self.open_delay_s:
            time.sleep(self.open_delay_s)
        if self.fail_opens:
            raise PermissionError(13, "Permission denied", path)
        with self._lock:
            self.opened.append(path)
            self.events.append(("open", path))
            self.files.setdefault(path, "")
        return _MemoryFile(self, path)

    def makedirs(self, path: str) -> None:
        self.dirs.add(path)

    def read_text(self, path: str) -> str:
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", path)
        return self.files[path]

    def lines(self, path: str):
        return self.files.get(path, "").splitlines()


# --- Fixtures ---

@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 14, 9, 30, 0))


@pytest.fixture
def memfs():
    return MemoryFileSystem()


@pytest.fixture
def console_stream():
    return io.StringIO()


@pytest.fixture
def console(console_stream):
    return ConsoleSink(console_stream)
