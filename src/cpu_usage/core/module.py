"""Load/unload hooks that wire the collaborators around a ReportScheduler."""

import logging
from concurrent.futures import Executor
from typing import Callable, Optional

from ..counters import CounterSource
from ..exceptions import ExecutionSlotUnavailableError
from .config import ReportConfig
from .reporter import REPORT_LOGGER, LogReporter, Reporter
from .sampler import Sampler
from .scheduler import Clock, ReportScheduler, single_worker_lane

LOG = logging.getLogger(REPORT_LOGGER)


def module_start(
    config: ReportConfig,
    source: Optional[CounterSource] = None,
    reporter: Optional[Reporter] = None,
    clock: Optional[Clock] = None,
    executor_factory: Callable[[], Executor] = single_worker_lane,
) -> Optional[ReportScheduler]:
    """Start periodic reporting.

    Args:
        config: Validated report configuration.
        source: Counter source override (built from ``config`` when None).
        reporter: Report sink override (logs to the ``cpu_usage`` logger when None).
        clock: Clock override, mainly for tests.
        executor_factory: Worker lane factory override, mainly for tests.

    Returns:
        The running scheduler, or None when the worker lane could not be
        acquired. Nothing is left running in that case.
    """
    LOG.info("enabled with period of %d seconds", config.period)
    scheduler = ReportScheduler(
        Sampler(source or config.build_counter_source()),
        reporter or LogReporter(),
        clock=clock,
        executor_factory=executor_factory,
    )
    try:
        scheduler.start(config.period)
    except ExecutionSlotUnavailableError as exc:
        LOG.error("could not create a worker lane for periodic reports, aborting... (%s)", exc)
        return None
    return scheduler


def module_stop(scheduler: ReportScheduler) -> None:
    LOG.info("waiting for report work to end...")
    scheduler.stop()
    LOG.info("disabled reporting and cleaned-up the module")
