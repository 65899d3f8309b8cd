from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from namedlog.core.config import GlobalConfig
from namedlog.core.loader import parse_config
from namedlog.core.sinks import LocalFileSystem
from namedlog.utils.config import SETTINGS


def describe(config: GlobalConfig) -> List[str]:
    """Human-readable lines for an effective configuration."""
    outputs = ",".join(sorted(o.value for o in config.outputs))
    lines = [
        f"[Preflight] outputs={outputs} level={config.default_level.name} "
        f"split={config.default_split.name} dir={config.log_dir}",
    ]
    for name in sorted(config.per_name):
        entry = config.per_name[name]
        lines.append(
            f"[Preflight]   {name}: level={entry.level.name} split={entry.split_policy.name} "
            f"file={entry.file_base_name}"
        )
    return lines


def check(path: str, fs: Optional[LocalFileSystem] = None) -> int:
    fs = fs or LocalFileSystem()
    print(f"[Preflight] Reading {path}...")
    try:
        text = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"[Preflight] Cannot read config: {e}")
        return 1
    config = parse_config(text)
    if config is None:
        print("[Preflight] Config is malformed; the running configuration would be kept.")
        return 2
    for line in describe(config):
        print(line)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Validate a namedlog JSON config file.")
    parser.add_argument("config", nargs="?", default=SETTINGS.config_file)
    args = parser.parse_args(argv)
    sys.exit(check(args.config))

if __name__ == "__main__":
    main()
