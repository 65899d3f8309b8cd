# namedlog/utils/config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment once
load_dotenv()


@dataclass(frozen=True)
class LogSettings:
    """Process settings for the logging facility, read from the environment."""
    config_file: str = os.getenv("NAMEDLOG_CONFIG_FILE", "log.json")
    reload_interval_s: float = float(os.getenv("NAMEDLOG_RELOAD_INTERVAL", "10"))
    diag_level: str = os.getenv("NAMEDLOG_DIAG_LEVEL", "WARNING").upper()


SETTINGS = LogSettings()
