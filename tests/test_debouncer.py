import sys
import threading
import time
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from tailing import Debouncer  # noqa: E402


def _collect(debouncer):
    ticks = []
    times = []

    def consume():
        for _ in debouncer.ticks():
            ticks.append(None)
            times.append(time.monotonic())

    thread = threading.Thread(target=consume, daemon=True)
    thread.start()
    return thread, ticks, times


def test_burst_collapses_into_one_tick():
    debouncer = Debouncer(quiet_window=0.1)
    thread, ticks, _ = _collect(debouncer)

    for _ in range(10):
        debouncer.signal()
        time.sleep(0.005)
    time.sleep(0.4)
    debouncer.close()
    thread.join(timeout=2)

    assert len(ticks) == 1


def test_separate_bursts_give_separate_ticks():
    debouncer = Debouncer(quiet_window=0.05)
    thread, ticks, _ = _collect(debouncer)

    debouncer.signal()
    time.sleep(0.3)
    debouncer.signal()
    debouncer.signal()
    time.sleep(0.3)
    debouncer.close()
    thread.join(timeout=2)

    assert len(ticks) == 2


def test_tick_waits_for_quiet_window():
    debouncer = Debouncer(quiet_window=0.1)
    thread, _, times = _collect(debouncer)

    sent = time.monotonic()
    debouncer.signal()
    time.sleep(0.4)
    debouncer.close()
    thread.join(timeout=2)

    assert len(times) == 1
    assert times[0] - sent >= 0.1


def test_close_ends_iteration_without_signals():
    debouncer = Debouncer(quiet_window=0.05)
    thread, ticks, _ = _collect(debouncer)

    debouncer.close()
    thread.join(timeout=2)

    assert not thread.is_alive()
    assert ticks == []
    assert debouncer.closed


def test_signals_after_close_are_ignored():
    debouncer = Debouncer(quiet_window=0.05)
    debouncer.close()
    debouncer.signal()

    assert list(debouncer.ticks()) == []


def test_rejects_non_positive_window():
    with pytest.raises(ValueError):
        Debouncer(quiet_window=0)
