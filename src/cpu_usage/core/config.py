import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..counters import (
    DEFAULT_PROC_STAT,
    CounterSource,
    ProcStatCounterSource,
    PsutilCounterSource,
)

DEFAULT_PERIOD = 10
SOURCES = ("auto", "procfs", "psutil")


@dataclass
class ReportConfig:
    """Configuration for periodic CPU usage reporting."""

    period: int = DEFAULT_PERIOD
    source: str = "auto"
    proc_stat_path: Path = DEFAULT_PROC_STAT
    log_level: str = "INFO"

    def __post_init__(self):
        if isinstance(self.period, bool) or not isinstance(self.period, int):
            raise ValueError(f"Period must be an integer number of seconds, got {self.period!r}")
        if self.period <= 0:
            raise ValueError(f"Period must be positive, got {self.period}")
        if self.source not in SOURCES:
            raise ValueError(f"Counter source must be one of {', '.join(SOURCES)}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.proc_stat_path = Path(self.proc_stat_path)

    def with_period(self, period: int) -> "ReportConfig":
        """Override the report period.

        Args:
            period: Seconds between reports

        Returns:
            Self for method chaining
        """
        if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
            raise ValueError(f"Period must be a positive integer, got {period!r}")
        self.period = period
        return self

    def with_source(self, source: str) -> "ReportConfig":
        """Override the counter source ('auto', 'procfs', 'psutil')."""
        if source not in SOURCES:
            raise ValueError(f"Counter source must be one of {', '.join(SOURCES)}")
        self.source = source
        return self

    def resolved_source(self) -> str:
        """Name of the counter source 'auto' settles on for this host."""
        if self.source != "auto":
            return self.source
        if os.access(self.proc_stat_path, os.R_OK):
            return "procfs"
        return "psutil"

    def build_counter_source(self) -> CounterSource:
        if self.resolved_source() == "procfs":
            return ProcStatCounterSource(self.proc_stat_path)
        return PsutilCounterSource()
