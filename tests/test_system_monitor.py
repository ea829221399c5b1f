###########EXTERNAL IMPORTS############

import logging
import time
import psutil
import pytest
from pathlib import Path
from typing import Iterator, List, Optional

#######################################

#############LOCAL IMPORTS#############

from medianwindow.analytics.system import SystemMonitor
from medianwindow.model.window import WindowOptions
import medianwindow.util.functions.performance as perf

#######################################


def feed(monkeypatch: pytest.MonkeyPatch, cpu_values: List[float], ram_values: List[float]) -> None:
    cpu_iter: Iterator[float] = iter(cpu_values)
    ram_iter: Iterator[float] = iter(ram_values)

    def fake_cpu(interval: Optional[float] = None) -> float:
        return next(cpu_iter)

    def fake_ram() -> float:
        return next(ram_iter)

    monkeypatch.setattr(perf, "get_cpu_usage_percentage", fake_cpu)
    monkeypatch.setattr(perf, "get_ram_usage_percentage", fake_ram)


def test_sample_keeps_rolling_statistics(monkeypatch: pytest.MonkeyPatch):
    feed(monkeypatch, [10.0, 90.0, 30.0, 50.0, 20.0], [40.0, 41.0, 42.0, 43.0, 44.0])
    monitor = SystemMonitor(options=WindowOptions(capacity=3))

    for _ in range(5):
        monitor.sample()

    cpu = monitor.get_cpu_usage_statistics()
    assert cpu.size == 3
    assert cpu.min_value == 20.0
    assert cpu.median_value == 30.0
    assert cpu.max_value == 50.0
    assert monitor.get_cpu_usage_history() == [20.0, 30.0, 50.0]
    assert monitor.get_ram_usage_history() == [42.0, 43.0, 44.0]
    assert monitor.get_ram_usage_statistics().median_value == 43.0


def test_samples_are_rounded(monkeypatch: pytest.MonkeyPatch):
    feed(monkeypatch, [12.3456], [67.891])
    monitor = SystemMonitor(options=WindowOptions(capacity=2))
    monitor.sample()
    assert monitor.get_cpu_usage_history() == [12.35]
    assert monitor.get_ram_usage_history() == [67.89]


def test_resize_history(monkeypatch: pytest.MonkeyPatch):
    feed(monkeypatch, [5.0, 1.0, 3.0, 4.0], [1.0, 2.0, 3.0, 4.0])
    monitor = SystemMonitor(options=WindowOptions(capacity=4))
    for _ in range(4):
        monitor.sample()

    monitor.resize_history(WindowOptions(capacity=2, evict_from_front=False))
    assert monitor.options.capacity == 2
    assert monitor.get_cpu_usage_history() == [1.0, 5.0]
    assert monitor.get_ram_usage_history() == [1.0, 2.0]


def test_empty_monitor_statistics():
    monitor = SystemMonitor()
    statistics = monitor.get_cpu_usage_statistics()
    assert statistics.size == 0
    assert statistics.capacity == SystemMonitor.DATA_SIZE_SECONDS
    assert statistics.median_value is None


def test_start_and_stop(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(perf, "get_cpu_usage_percentage", lambda interval=None: 25.0)
    monkeypatch.setattr(perf, "get_ram_usage_percentage", lambda: 50.0)
    monitor = SystemMonitor(options=WindowOptions(capacity=10), polling_interval=0.01)

    monitor.start()
    assert monitor.is_running()
    with pytest.raises(RuntimeError):
        monitor.start()

    deadline = time.monotonic() + 5
    while monitor.get_cpu_usage_statistics().size < 2 and time.monotonic() < deadline:
        time.sleep(0.01)

    monitor.stop()
    assert not monitor.is_running()
    assert monitor.get_cpu_usage_statistics().size >= 2
    assert monitor.get_ram_usage_statistics().median_value == 50.0
    with pytest.raises(RuntimeError):
        monitor.stop()


def test_sampler_logs_failed_reading(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    monitor = SystemMonitor(options=WindowOptions(capacity=2), polling_interval=0.01)

    def failing_cpu(interval: Optional[float] = None) -> float:
        monitor.stop_event.set()
        raise psutil.Error("sensor unavailable")

    monkeypatch.setattr(perf, "get_cpu_usage_percentage", failing_cpu)
    caplog.set_level(logging.WARNING, logger="medianwindow")

    monitor._sampler()

    assert "Could not sample system usage" in caplog.text
    assert monitor.get_cpu_usage_statistics().size == 0


def test_from_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for key in ("WINDOW_CAPACITY", "WINDOW_EVICT_FROM_FRONT", "POLLING_INTERVAL_SECONDS"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)

    config_file = tmp_path / "monitor_options.env"
    config_file.write_text("WINDOW_CAPACITY=30\nWINDOW_EVICT_FROM_FRONT=TRUE\nPOLLING_INTERVAL_SECONDS=2\n")

    monitor = SystemMonitor.from_config(str(config_file))
    assert monitor.options == WindowOptions(capacity=30, evict_from_front=True)
    assert monitor.polling_interval == 2.0
    assert monitor.cpu_usage_perc.max_size() == 30
