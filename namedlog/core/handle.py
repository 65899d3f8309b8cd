from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Optional, Tuple

from namedlog.core.levels import Level, Output, SplitPolicy
from namedlog.core.sinks import ConsoleSink, FileSink


@dataclass
class LoggerHandle:
    """
    Resolved state for one log name. Derived from (GlobalConfig, time): the
    registry swaps in a new handle when the file path or output set drifts.
    Only ``level`` is ever changed in place.
    """
    name: str
    level: Level
    split_policy: SplitPolicy
    file_base_name: str
    file_path: Optional[str] = None
    file_sink: Optional[FileSink] = None
    console: Optional[ConsoleSink] = None

    @property
    def outputs(self) -> FrozenSet[Output]:
        found = set()
        if self.file_sink is not None:
            found.add(Output.FILE)
        if self.console is not None:
            found.add(Output.CONSOLE)
        return frozenset(found)

    def enabled_for(self, level: Level) -> bool:
        return level >= self.level

    def make_record(self, level: Level, msg: str, args: Tuple, when: datetime) -> logging.LogRecord:
        record = logging.LogRecord(self.name, level.stdlib, "", 0, msg, args, None)
        record.created = when.timestamp()
        record.msecs = (record.created - int(record.created)) * 1000
        return record

    def emit(self, record: logging.LogRecord) -> None:
        if self.file_sink is not None:
            self.file_sink.emit(record)
        if self.console is not None:
            self.console.emit(record)

    def close(self) -> None:
        # the console stream is shared and outlives every handle
        if self.file_sink is not None:
            self.file_sink.close()
