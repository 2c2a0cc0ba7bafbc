"""
cpu-usage: periodic whole-system CPU utilization reporting

Samples cumulative per-core CPU time, turns the busy share of each interval
into one percentage and reports it through the logging stack at a fixed period.
"""

from cpu_usage.core import report_cpu_usage
from cpu_usage.core.config import ReportConfig
from cpu_usage.core.module import module_start, module_stop
from cpu_usage.core.reporter import LogReporter
from cpu_usage.core.sampler import AggregateSnapshot, Sampler
from cpu_usage.core.scheduler import ReportScheduler, SchedulerState
from cpu_usage.core.usage import UsageSample, compute_usage, format_report
from cpu_usage.counters import BUSY, CoreCounters, StateCategory

__version__ = "0.1.0"

__all__ = [
    "AggregateSnapshot",
    "BUSY",
    "CoreCounters",
    "LogReporter",
    "ReportConfig",
    "ReportScheduler",
    "Sampler",
    "SchedulerState",
    "StateCategory",
    "UsageSample",
    "compute_usage",
    "format_report",
    "module_start",
    "module_stop",
    "report_cpu_usage",
    "__version__",
]
