import json
import os
import threading

from namedlog.core.levels import Level
from namedlog.core.registry import LoggerRegistry


def _run_together(n, target):
    barrier = threading.Barrier(n)
    results = [None] * n

    def worker(i):
        barrier.wait()
        results[i] = target()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    return results


def test_concurrent_first_resolution_opens_one_file(memfs, clock, console):
    memfs.files["log.json"] = json.dumps({"FileDir": "/l"})
    memfs.open_delay_s = 0.01
    reg = LoggerRegistry("log.json", clock=clock, fs=memfs, console=console)

    handles = _run_together(16, lambda: reg.resolve("fresh"))

    assert memfs.opened == [os.path.join("/l", "fresh.log")]
    assert all(h is handles[0] for h in handles)


def test_concurrent_emission_keeps_every_line(memfs, clock, console):
    memfs.files["log.json"] = json.dumps({"FileDir": "/l"})
    reg = LoggerRegistry("log.json", clock=clock, fs=memfs, console=console)

    def burst():
        for i in range(50):
            reg.log("busy", Level.INFO, "line %d", i)

    _run_together(8, burst)

    lines = memfs.lines(os.path.join("/l", "busy.log"))
    assert len(lines) == 8 * 50
    assert all("[INFO] line " in line for line in lines)
