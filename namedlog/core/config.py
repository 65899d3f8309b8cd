from __future__ import annotations
import threading
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Mapping, Optional

from namedlog.core.levels import (
    DEFAULT_LEVEL,
    DEFAULT_LOG_DIR,
    DEFAULT_OUTPUTS,
    DEFAULT_SPLIT,
    Level,
    Output,
    SplitPolicy,
)


@dataclass(frozen=True)
class NameConfig:
    """Settings for one logical log name."""
    name: str
    level: Level
    split_policy: SplitPolicy
    file_base_name: str = ""

    def __post_init__(self) -> None:
        if not self.file_base_name:
            object.__setattr__(self, "file_base_name", self.name)


@dataclass(frozen=True)
class GlobalConfig:
    """
    Effective configuration snapshot. Never mutated: every change builds a
    new snapshot, so a reader holding one always sees a consistent whole.
    """
    outputs: FrozenSet[Output] = DEFAULT_OUTPUTS
    default_level: Level = DEFAULT_LEVEL
    default_split: SplitPolicy = DEFAULT_SPLIT
    log_dir: str = DEFAULT_LOG_DIR
    per_name: Mapping[str, NameConfig] = field(default_factory=dict)

    def settings_for(self, name: str) -> NameConfig:
        """Per-name entry if present, else one built from the defaults."""
        entry = self.per_name.get(name)
        if entry is not None:
            return entry
        return NameConfig(name=name, level=self.default_level, split_policy=self.default_split)

    def with_level(self, name: str, level: Level) -> "GlobalConfig":
        entry = self.per_name.get(name)
        if entry is None:
            entry = NameConfig(name=name, level=level, split_policy=self.default_split)
        else:
            entry = replace(entry, level=level)
        per_name: Dict[str, NameConfig] = dict(self.per_name)
        per_name[name] = entry
        return replace(self, per_name=per_name)


class ConfigStore:
    """
    Holds the current GlobalConfig. The store's lock is the single lock of
    the logging facility: the registry takes it for handle map mutation and
    handle creation so a handle is never built against a half-swapped config.
    """

    def __init__(self, initial: Optional[GlobalConfig] = None) -> None:
        self.lock = threading.RLock()
        self._config = initial or GlobalConfig()

    def current(self) -> GlobalConfig:
        return self._config

    def replace(self, config: GlobalConfig) -> None:
        with self.lock:
            self._config = config

    def set_name_level(self, name: str, level: Level) -> None:
        with self.lock:
            self._config = self._config.with_level(name, level)
