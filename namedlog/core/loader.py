"""
namedlog/core/loader.py
-----------------------
Reads the JSON config file and swaps it into the ConfigStore.

File layout:
    {
      "Out": "file,console",
      "Level": 2,
      "FileSplit": 1,
      "FileDir": "./log/",
      "LogLevels": [{"LogName": "svc", "Level": 4, "FileSplit": 2, "FileName": "service"}]
    }

A read or parse failure leaves the current configuration in force.
"""

from __future__ import annotations
import json
from datetime import datetime
from typing import Any, Dict, Optional

from namedlog.audit.logger import get_logger
from namedlog.core.config import ConfigStore, GlobalConfig, NameConfig
from namedlog.core.levels import (
    DEFAULT_LEVEL,
    DEFAULT_LOG_DIR,
    DEFAULT_SPLIT,
    coerce_level,
    coerce_split,
    parse_outputs,
)
from namedlog.core.sinks import LocalFileSystem
from namedlog.utils.config import SETTINGS

logger = get_logger(__name__)


def _non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def parse_config(text: str) -> Optional[GlobalConfig]:
    """Decode and validate a config document. None when it is not usable at all."""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow
        logger.debug(f"Config is not valid JSON: {e}")
        return None
    if not isinstance(data, dict):
        logger.debug("Config top level is not an object")
        return None

    level = coerce_level(data.get("Level")) or DEFAULT_LEVEL
    split = coerce_split(data.get("FileSplit")) or DEFAULT_SPLIT
    log_dir = _non_empty_str(data.get("FileDir")) or _non_empty_str(data.get("LogDir")) or DEFAULT_LOG_DIR

    per_name: Dict[str, NameConfig] = {}
    entries = data.get("LogLevels")
    for item in entries if isinstance(entries, list) else []:
        if not isinstance(item, dict):
            continue
        name = _non_empty_str(item.get("LogName"))
        if name is None:
            continue
        # unset fields inherit the defaults parsed just above
        per_name[name] = NameConfig(
            name=name,
            level=coerce_level(item.get("Level")) or level,
            split_policy=coerce_split(item.get("FileSplit")) or split,
            file_base_name=_non_empty_str(item.get("FileName")) or name,
        )

    return GlobalConfig(
        outputs=parse_outputs(data.get("Out")),
        default_level=level,
        default_split=split,
        log_dir=log_dir,
        per_name=per_name,
    )


class ConfigLoader:
    """Polls the config file at most once per interval."""

    def __init__(
        self,
        store: ConfigStore,
        fs: LocalFileSystem,
        path: str = SETTINGS.config_file,
        interval_s: float = SETTINGS.reload_interval_s,
    ) -> None:
        self.store = store
        self.fs = fs
        self.path = path
        self.interval_s = interval_s
        self._last_checked: Optional[datetime] = None

    def set_path(self, path: str) -> None:
        with self.store.lock:
            self.path = path
            self._last_checked = None

    def reload_if_stale(self, now: datetime) -> bool:
        """Re-read the file when the interval has passed. True if the config was replaced."""
        with self.store.lock:
            last = self._last_checked
            # a clock stepped backwards counts as stale
            if last is not None and 0 <= (now - last).total_seconds() < self.interval_s:
                return False
            self._last_checked = now
            # read under the lock so no handle is built from the config being replaced
            return self._load(self.path)

    def _load(self, path: str) -> bool:
        if not path:
            return False
        try:
            text = self.fs.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Config {path} not read: {e}")
            return False
        config = parse_config(text)
        if config is None:
            logger.warning(f"Config {path} is malformed; keeping the current configuration")
            return False
        try:
            self.fs.makedirs(config.log_dir)
        except OSError as e:
            logger.warning(f"Could not create log dir {config.log_dir}: {e}")
        self.store.replace(config)
        logger.debug(f"Config {path} loaded")
        return True
