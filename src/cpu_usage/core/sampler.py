"""
Aggregation of per-core counters into one whole-system snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..counters import CounterSource, wrap

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateSnapshot:
    """Cumulative ticks summed over all active cores.

    ``total`` covers every state category, ``relevant`` only the busy ones.
    Both live in the unsigned counter word.
    """

    total: int = 0
    relevant: int = 0


class Sampler:
    """Take aggregate snapshots from a counter source."""

    def __init__(self, source: CounterSource) -> None:
        self.source = source

    def sample(self) -> AggregateSnapshot:
        total = 0
        relevant = 0
        cores = self.source.read()
        for counters in cores:
            total += counters.total()
            relevant += counters.busy()
        snapshot = AggregateSnapshot(total=wrap(total), relevant=wrap(relevant))
        LOG.debug(
            "Sampled %d cores: total=%d relevant=%d",
            len(cores),
            snapshot.total,
            snapshot.relevant,
        )
        return snapshot
