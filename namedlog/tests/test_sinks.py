import logging
import os
from datetime import datetime

from namedlog.core.levels import Level, SplitPolicy
from namedlog.core.sinks import ConsoleSink, FileSink, LocalFileSystem, derive_file_path


def _record(name, level, msg, *args):
    return logging.LogRecord(name, level.stdlib, "", 0, msg, args, None)


def test_derive_file_path_per_split_policy():
    when = datetime(2026, 1, 5, 23, 59)
    assert derive_file_path("/tmp/l", "svc", SplitPolicy.NONE, when) == os.path.join("/tmp/l", "svc.log")
    assert derive_file_path("/tmp/l", "svc", SplitPolicy.DAY, when) == os.path.join("/tmp/l", "svc_2026-1-5.log")
    assert derive_file_path("/tmp/l", "svc", SplitPolicy.MONTH, when) == os.path.join("/tmp/l", "svc_2026-1.log")


def test_file_sink_appends_level_and_message(tmp_path):
    path = tmp_path / "svc.log"
    path.write_text("earlier line\n", encoding="utf-8")

    sink = FileSink.open(LocalFileSystem(), str(path))
    sink.emit(_record("svc", Level.ERROR, "boom %d", 7))
    sink.close()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "earlier line"
    assert lines[1].endswith("[ERROR] boom 7")
    assert "svc" not in lines[1]
    assert sink.closed


def test_file_sink_write_after_close_does_not_raise(tmp_path):
    sink = FileSink.open(LocalFileSystem(), str(tmp_path / "x.log"))
    sink.close()
    sink.emit(_record("x", Level.INFO, "late"))


def test_console_sink_names_the_logger(console, console_stream):
    console.emit(_record("svc", Level.INFO, "hello %s", "there"))
    assert console_stream.getvalue().rstrip("\n").endswith("[svc] [INFO] hello there")


def test_default_console_sink_follows_stdout(capsys):
    sink = ConsoleSink()
    sink.emit(_record("api", Level.WARNING, "slow"))
    out = capsys.readouterr().out
    assert "[api] [WARNING] slow" in out
