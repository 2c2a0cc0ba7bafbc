from pathlib import Path

import pytest

from cpu_usage.core.config import DEFAULT_PERIOD, ReportConfig
from cpu_usage.counters import ProcStatCounterSource, PsutilCounterSource


def test_defaults():
    config = ReportConfig()
    assert config.period == DEFAULT_PERIOD == 10
    assert config.source == "auto"
    assert config.proc_stat_path == Path("/proc/stat")
    assert config.log_level == "INFO"


@pytest.mark.parametrize("period", [0, -5, 1.5, "10", True])
def test_invalid_period(period):
    with pytest.raises(ValueError):
        ReportConfig(period=period)


def test_invalid_source():
    with pytest.raises(ValueError):
        ReportConfig(source="sysfs")


def test_invalid_log_level():
    with pytest.raises(ValueError):
        ReportConfig(log_level="chatty")


def test_chaining_overrides():
    config = ReportConfig().with_period(3).with_source("psutil")
    assert config.period == 3
    assert config.source == "psutil"

    with pytest.raises(ValueError):
        config.with_period(0)
    with pytest.raises(ValueError):
        config.with_source("nope")


def test_proc_stat_path_accepts_strings(tmp_path):
    config = ReportConfig(proc_stat_path=str(tmp_path / "stat"))
    assert config.proc_stat_path == tmp_path / "stat"


def test_auto_source_prefers_readable_procfs(tmp_path):
    stat = tmp_path / "stat"
    stat.write_text("cpu0 1 0 1 8\n")

    config = ReportConfig(proc_stat_path=stat)
    assert config.resolved_source() == "procfs"
    source = config.build_counter_source()
    assert isinstance(source, ProcStatCounterSource)
    assert source.path == stat


def test_auto_source_falls_back_to_psutil(tmp_path):
    config = ReportConfig(proc_stat_path=tmp_path / "missing")
    assert config.resolved_source() == "psutil"
    assert isinstance(config.build_counter_source(), PsutilCounterSource)


def test_explicit_source_wins(tmp_path):
    stat = tmp_path / "stat"
    stat.write_text("cpu0 1 0 1 8\n")
    config = ReportConfig(source="psutil", proc_stat_path=stat)
    assert config.resolved_source() == "psutil"
