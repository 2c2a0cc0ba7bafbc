"""Available counter source implementations."""

from .base import (
    BUSY,
    COUNTER_BITS,
    COUNTER_MASK,
    CoreCounters,
    CounterSource,
    StateCategory,
    wrap,
)
from .procfs import DEFAULT_PROC_STAT, ProcStatCounterSource
from .psutil_source import PsutilCounterSource

__all__ = [
    "BUSY",
    "COUNTER_BITS",
    "COUNTER_MASK",
    "CoreCounters",
    "CounterSource",
    "DEFAULT_PROC_STAT",
    "ProcStatCounterSource",
    "PsutilCounterSource",
    "StateCategory",
    "wrap",
]
