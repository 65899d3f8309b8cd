from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from namedlog.audit.logger import get_logger
from namedlog.core.clock import SystemClock
from namedlog.core.config import ConfigStore, GlobalConfig
from namedlog.core.handle import LoggerHandle
from namedlog.core.levels import Level, Output, coerce_level
from namedlog.core.loader import ConfigLoader
from namedlog.core.sinks import ConsoleSink, FileSink, LocalFileSystem, derive_file_path
from namedlog.utils.config import SETTINGS

logger = get_logger(__name__)


class LoggerRegistry:
    """
    Maps log names to handles. Handles are created on first use and replaced
    whenever the config or the calendar moves their file path or output set.
    All map mutation, config replacement and file open/close happen under
    the config store's lock.
    """

    def __init__(
        self,
        config_path: str = SETTINGS.config_file,
        *,
        clock: Optional[Any] = None,
        fs: Optional[LocalFileSystem] = None,
        console: Optional[ConsoleSink] = None,
        store: Optional[ConfigStore] = None,
        reload_interval_s: float = SETTINGS.reload_interval_s,
    ) -> None:
        self.clock = clock or SystemClock()
        self.fs = fs or LocalFileSystem()
        self.console = console or ConsoleSink()
        self.store = store or ConfigStore()
        self.loader = ConfigLoader(self.store, self.fs, config_path, reload_interval_s)
        self._handles: Dict[str, LoggerHandle] = {}
        log_dir = self.store.current().log_dir
        try:
            self.fs.makedirs(log_dir)
        except OSError as e:
            logger.warning(f"Could not create log dir {log_dir}: {e}")

    # --- config ---
    def set_config_file(self, path: str) -> None:
        self.loader.set_path(path)

    def config(self) -> GlobalConfig:
        return self.store.current()

    def _apply_levels(self) -> None:
        config = self.store.current()
        for name, handle in self._handles.items():
            handle.level = config.settings_for(name).level

    # --- resolution ---
    def _is_current(self, handle: LoggerHandle, config: GlobalConfig, now: datetime) -> bool:
        if (Output.CONSOLE in config.outputs) != (handle.console is not None):
            return False
        if Output.FILE not in config.outputs:
            return handle.file_sink is None
        settings = config.settings_for(handle.name)
        expected = derive_file_path(config.log_dir, settings.file_base_name, settings.split_policy, now)
        return handle.file_sink is not None and expected == handle.file_path

    def _create(self, name: str, config: GlobalConfig, now: datetime) -> Optional[LoggerHandle]:
        settings = config.settings_for(name)
        handle = LoggerHandle(
            name=name,
            level=settings.level,
            split_policy=settings.split_policy,
            file_base_name=settings.file_base_name,
        )
        if Output.FILE in config.outputs:
            path = derive_file_path(config.log_dir, settings.file_base_name, settings.split_policy, now)
            try:
                handle.file_sink = FileSink.open(self.fs, path)
            except OSError as e:
                logger.warning(f"Could not open log file {path} for '{name}': {e}")
                return None
            handle.file_path = path
        if Output.CONSOLE in config.outputs:
            handle.console = self.console
        return handle

    def resolve(self, name: str, now: Optional[datetime] = None) -> Optional[LoggerHandle]:
        """Current handle for ``name``, creating or replacing it as needed. None if its file cannot be opened."""
        if now is None:
            now = self.clock.now()
        with self.store.lock:
            if self.loader.reload_if_stale(now):
                self._apply_levels()

        handle = self._handles.get(name)
        if handle is not None and self._is_current(handle, self.store.current(), now):
            return handle

        with self.store.lock:
            # re-check: another thread may have created or replaced it meanwhile
            config = self.store.current()
            handle = self._handles.get(name)
            if handle is not None:
                if self._is_current(handle, config, now):
                    return handle
                del self._handles[name]
                handle.close()
            handle = self._create(name, config, now)
            if handle is not None:
                self._handles[name] = handle
            return handle

    # --- level override ---
    def set_level(self, name: str, level: Any) -> None:
        """
        Force the level of ``name`` now and record it in the in-memory config.
        A later successful reload of the config file replaces the whole config,
        so an override that the file does not repeat is lost at that point.
        """
        lvl = coerce_level(level)
        if lvl is None:
            logger.debug(f"Ignoring out-of-range level {level!r} for '{name}'")
            return
        try:
            with self.store.lock:
                handle = self.resolve(name)
                if handle is not None:
                    handle.level = lvl
                self.store.set_name_level(name, lvl)
        except Exception:
            logger.exception(f"Setting level for '{name}' failed")

    # --- emission ---
    def _emit(self, name: str, level: Level, msg: Any, args: Tuple, join: bool) -> None:
        try:
            now = self.clock.now()
            handle = self.resolve(name, now)
            if handle is None or not handle.enabled_for(level):
                return
            if join:
                msg, args = " ".join(str(a) for a in args), ()
            handle.emit(handle.make_record(level, msg, args, now))
        except Exception:
            logger.exception(f"Logging for '{name}' failed")

    def log(self, name: str, level: Level, fmt: Any, *args: Any) -> None:
        """Emit ``fmt % args`` for ``name``. Formatting happens only if the level passes. Never raises."""
        self._emit(name, level, fmt, args, join=False)

    def log_joined(self, name: str, level: Level, *args: Any) -> None:
        """Emit the ``str()`` of every argument joined by spaces. Never raises."""
        self._emit(name, level, "", args, join=True)
