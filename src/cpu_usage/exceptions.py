"""Custom exceptions used by the cpu_usage package."""


class CpuUsageError(RuntimeError):
    """Base class for CPU usage reporting errors."""


class ExecutionSlotUnavailableError(CpuUsageError):
    """Raised when the worker lane for periodic reports cannot be acquired."""


class CounterSourceError(CpuUsageError):
    """Raised when per-core counters are unreadable or malformed."""


class SchedulerStateError(CpuUsageError):
    """Raised when a scheduler operation is invalid in its current state."""
