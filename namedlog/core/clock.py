from __future__ import annotations
from datetime import datetime


class SystemClock:
    """Wall-clock time source. Tests substitute an object with the same now()."""

    def now(self) -> datetime:
        return datetime.now()
