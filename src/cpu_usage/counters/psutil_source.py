from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import psutil

from ..exceptions import CounterSourceError
from .base import CoreCounters, CounterSource, StateCategory, merge_times

LOG = logging.getLogger(__name__)

# psutil reports seconds as floats; counters are kept as integer centiseconds.
TICKS_PER_SECOND = 100

_FIELD_CATEGORIES: Dict[str, StateCategory] = {
    "user": StateCategory.USER,
    "nice": StateCategory.NICE,
    "system": StateCategory.SYSTEM,
    "idle": StateCategory.IDLE,
    "iowait": StateCategory.IOWAIT,
    "irq": StateCategory.IRQ,
    "softirq": StateCategory.SOFTIRQ,
    "steal": StateCategory.STEAL,
    "guest": StateCategory.GUEST,
    "guest_nice": StateCategory.GUEST_NICE,
    # Windows names
    "interrupt": StateCategory.IRQ,
    "dpc": StateCategory.SOFTIRQ,
}


class PsutilCounterSource(CounterSource):
    """Portable counter source built on ``psutil.cpu_times(percpu=True)``.

    psutil returns a plain list without OS core ids, so ``CoreCounters.core``
    is the position in that list. After a hot-unplug these numbers no longer
    match the procfs ids; the aggregate sums are unaffected.
    """

    NAME = "psutil"

    def read(self) -> Sequence[CoreCounters]:
        try:
            per_cpu = psutil.cpu_times(percpu=True)
        except (OSError, psutil.Error) as exc:
            raise CounterSourceError(f"psutil could not read CPU times: {exc}") from exc

        cores: List[CoreCounters] = []
        for core, times in enumerate(per_cpu):
            pairs = [
                (
                    _FIELD_CATEGORIES.get(name, StateCategory.OTHER),
                    int(round(getattr(times, name) * TICKS_PER_SECOND)),
                )
                for name in times._fields
            ]
            cores.append(CoreCounters(core=core, times=merge_times(pairs)))
        LOG.debug("Read counters for %d cores from psutil", len(cores))
        return cores
