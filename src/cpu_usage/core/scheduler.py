"""
Recurring report task: arm, tick, stop-and-drain.
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, Protocol

from ..exceptions import ExecutionSlotUnavailableError, SchedulerStateError
from .reporter import Reporter
from .sampler import AggregateSnapshot, Sampler
from .usage import UsageSample, compute_usage, format_report

LOG = logging.getLogger(__name__)


class Clock(Protocol):
    def monotonic(self) -> float:
        ...

    def wait(self, event: threading.Event, timeout: float) -> bool:
        """Block until ``event`` is set or ``timeout`` elapses; return whether it is set."""
        ...


class SystemClock:
    def monotonic(self) -> float:
        return time.monotonic()

    def wait(self, event: threading.Event, timeout: float) -> bool:
        return event.wait(timeout)


class SchedulerState(enum.Enum):
    IDLE = "idle"
    STARTING = "starting"
    ARMED = "armed"
    TICKING = "ticking"
    DRAINING = "draining"
    STOPPED = "stopped"


def single_worker_lane() -> Executor:
    return ThreadPoolExecutor(max_workers=1, thread_name_prefix="cpu_usage")


class ReportScheduler:
    """Periodically sample, compute and report CPU usage on one worker lane.

    The lane runs a single loop task, so ticks never overlap and the baseline
    is only touched from that task. ``stop()`` is the only cross-thread entry
    point: it clears the running flag, wakes the loop out of its wait and
    joins the lane.
    """

    def __init__(
        self,
        sampler: Sampler,
        reporter: Reporter,
        *,
        clock: Optional[Clock] = None,
        executor_factory: Callable[[], Executor] = single_worker_lane,
        calculator: Callable[[AggregateSnapshot, AggregateSnapshot], UsageSample] = compute_usage,
    ) -> None:
        self.sampler = sampler
        self.reporter = reporter
        self.clock = clock or SystemClock()
        self.calculator = calculator
        self._executor_factory = executor_factory
        self._executor: Optional[Executor] = None
        self._future: Optional[Future] = None
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._started = threading.Event()
        self._drained = threading.Event()
        self._state = SchedulerState.IDLE
        self._running = False
        self._period = 0
        self._deadline = 0.0
        self._baseline: Optional[AggregateSnapshot] = None
        self.ticks = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def period(self) -> int:
        return self._period

    @property
    def baseline(self) -> Optional[AggregateSnapshot]:
        return self._baseline

    def start(self, period: int) -> None:
        """Take the baseline reading and arm the first tick ``period`` seconds out.

        The scheduler is claimed (``starting``) before the lane is built, so a
        concurrent ``start()`` is rejected and a concurrent ``stop()`` waits for
        this call to finish and then keeps it from arming.
        """
        if period <= 0:
            raise ValueError(f"Period must be positive, got {period}")
        with self._lock:
            if self._state is not SchedulerState.IDLE:
                raise SchedulerStateError(f"Cannot start scheduler in state {self._state.value}")
            self._state = SchedulerState.STARTING
            self._running = True
            self._started.clear()
        try:
            self._start(period)
        finally:
            self._started.set()

    def _start(self, period: int) -> None:
        try:
            executor = self._executor_factory()
        except (RuntimeError, OSError) as exc:
            with self._lock:
                self._reset_to_idle(None)
            raise ExecutionSlotUnavailableError(
                "Could not create a worker lane for periodic reports"
            ) from exc

        try:
            self._baseline = self.sampler.sample()
        except Exception:
            with self._lock:
                self._reset_to_idle(executor)
            raise

        self._period = period
        self._deadline = self.clock.monotonic() + period
        with self._lock:
            if not self._running:
                executor.shutdown(wait=False)
                self._baseline = None
                self._state = SchedulerState.STOPPED
                self._drained.set()
                LOG.debug("Stop requested while starting, report scheduler not armed")
                return
            self._executor = executor
            try:
                self._future = executor.submit(self._run)
            except RuntimeError as exc:
                self._reset_to_idle(executor)
                raise ExecutionSlotUnavailableError(
                    "Could not start the worker lane for periodic reports"
                ) from exc
            self._state = SchedulerState.ARMED
        LOG.debug("Report scheduler armed with period %ds", period)

    def stop(self) -> None:
        """Stop re-arming, cancel the pending tick and wait for the lane to go idle."""
        while True:
            with self._lock:
                if self._state in (SchedulerState.IDLE, SchedulerState.STOPPED):
                    return
                self._running = False
                if self._state is SchedulerState.STARTING:
                    pending = self._started
                elif self._state is SchedulerState.DRAINING:
                    pending = self._drained
                else:
                    self._state = SchedulerState.DRAINING
                    break
            pending.wait()

        self._stop_event.set()
        future, executor = self._future, self._executor
        try:
            if executor is not None:
                executor.shutdown(wait=True)
            if future is not None and future.exception() is not None:
                LOG.error("Report loop terminated abnormally", exc_info=future.exception())
        finally:
            self._executor = None
            self._future = None
            self._baseline = None
            with self._lock:
                self._state = SchedulerState.STOPPED
            self._drained.set()
        LOG.debug("Report scheduler stopped after %d ticks", self.ticks)

    def _reset_to_idle(self, executor: Optional[Executor]) -> None:
        # Caller holds self._lock.
        self._running = False
        self._state = SchedulerState.IDLE
        self._executor = None
        self._future = None
        self._baseline = None
        if executor is not None:
            executor.shutdown(wait=False)

    def _run(self) -> None:
        while True:
            timeout = max(0.0, self._deadline - self.clock.monotonic())
            if self.clock.wait(self._stop_event, timeout):
                return
            with self._lock:
                if not self._running:
                    return
                self._state = SchedulerState.TICKING
            self._tick()
            with self._lock:
                if not self._running:
                    return
                self._rearm()
                self._state = SchedulerState.ARMED

    def _tick(self) -> None:
        try:
            current = self.sampler.sample()
            sample = self.calculator(self._baseline, current)
        except Exception:
            LOG.exception("CPU usage sampling failed, keeping previous baseline")
            return
        self.ticks += 1
        try:
            self.reporter.emit(logging.INFO, format_report(sample, self._period))
        except Exception:
            LOG.exception("Failed to deliver CPU usage report")
        self._baseline = current

    def _rearm(self) -> None:
        self._deadline += self._period
        now = self.clock.monotonic()
        if self._deadline <= now:
            LOG.warning(
                "Report tick ran %.3fs past its next deadline, re-arming from now",
                now - self._deadline,
            )
            self._deadline = now + self._period
