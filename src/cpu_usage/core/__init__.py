from contextlib import contextmanager
from typing import Optional

from ..counters import CounterSource
from ..exceptions import ExecutionSlotUnavailableError
from .config import ReportConfig
from .module import module_start, module_stop
from .reporter import Reporter


@contextmanager
def report_cpu_usage(
    config: Optional[ReportConfig] = None,
    source: Optional[CounterSource] = None,
    reporter: Optional[Reporter] = None,
):
    """Report CPU usage periodically for the duration of the block.

    Args:
        config: Report configuration (defaults to ReportConfig()).
        source: Counter source override.
        reporter: Report sink override.

    Yields:
        ReportScheduler: The running scheduler.

    Raises:
        ExecutionSlotUnavailableError: When reporting could not be started.

    Example:
        >>> with report_cpu_usage(ReportConfig(period=5)):
        ...     run_benchmark()
    """
    config = config or ReportConfig()
    scheduler = module_start(config, source=source, reporter=reporter)
    if scheduler is None:
        raise ExecutionSlotUnavailableError("CPU usage reporting could not be started")
    try:
        yield scheduler
    finally:
        module_stop(scheduler)


__all__ = ["report_cpu_usage"]
