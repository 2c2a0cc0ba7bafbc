from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Union

from ..exceptions import CounterSourceError
from .base import CoreCounters, CounterSource, StateCategory, merge_times

LOG = logging.getLogger(__name__)

DEFAULT_PROC_STAT = Path("/proc/stat")

# Column order of the cpuN lines, see proc(5).
_PROC_STAT_COLUMNS = (
    StateCategory.USER,
    StateCategory.NICE,
    StateCategory.SYSTEM,
    StateCategory.IDLE,
    StateCategory.IOWAIT,
    StateCategory.IRQ,
    StateCategory.SOFTIRQ,
    StateCategory.STEAL,
    StateCategory.GUEST,
    StateCategory.GUEST_NICE,
)


class ProcStatCounterSource(CounterSource):
    """Read per-core jiffies from the ``cpuN`` lines of /proc/stat.

    The kernel only lists online cores, so hot-unplugged cores drop out of the
    read on their own. Columns added by newer kernels are counted as
    ``StateCategory.OTHER``.
    """

    NAME = "procfs"

    def __init__(self, path: Union[str, Path] = DEFAULT_PROC_STAT) -> None:
        self.path = Path(path)

    def read(self) -> Sequence[CoreCounters]:
        try:
            with self.path.open("r", encoding="ascii") as f:
                lines = f.readlines()
        except OSError as exc:
            raise CounterSourceError(f"Failed to read CPU stats from {self.path}: {exc}") from exc

        cores: List[CoreCounters] = []
        for lineno, line in enumerate(lines, start=1):
            fields = line.split()
            # The aggregate "cpu" line is skipped; we sum the cores ourselves.
            if not fields or not fields[0].startswith("cpu") or fields[0] == "cpu":
                continue
            cores.append(self._parse_core(fields, lineno))
        LOG.debug("Read counters for %d cores from %s", len(cores), self.path)
        return cores

    def _parse_core(self, fields: List[str], lineno: int) -> CoreCounters:
        try:
            core = int(fields[0][3:])
            values = [int(value) for value in fields[1:]]
        except ValueError as exc:
            raise CounterSourceError(
                f"Invalid format in {self.path} line {lineno}: {' '.join(fields)}"
            ) from exc
        if not values:
            raise CounterSourceError(f"No counters for {fields[0]} in {self.path} line {lineno}")

        pairs = []
        for index, value in enumerate(values):
            category = (
                _PROC_STAT_COLUMNS[index]
                if index < len(_PROC_STAT_COLUMNS)
                else StateCategory.OTHER
            )
            pairs.append((category, value))
        try:
            return CoreCounters(core=core, times=merge_times(pairs))
        except ValueError as exc:
            raise CounterSourceError(str(exc)) from exc
