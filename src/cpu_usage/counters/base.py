"""
Base classes for per-core counter sources.
"""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Sequence

# Counters are accumulated in an unsigned 64-bit word.
COUNTER_BITS = 64
COUNTER_MASK = (1 << COUNTER_BITS) - 1


def wrap(value: int) -> int:
    """Reduce ``value`` into the unsigned counter word."""
    return value & COUNTER_MASK


class StateCategory(enum.Enum):
    """Kinds of accounted CPU time."""

    USER = "user"
    NICE = "nice"
    SYSTEM = "system"
    IDLE = "idle"
    IOWAIT = "iowait"
    IRQ = "irq"
    SOFTIRQ = "softirq"
    STEAL = "steal"
    GUEST = "guest"
    GUEST_NICE = "guest_nice"
    OTHER = "other"


BUSY: FrozenSet[StateCategory] = frozenset(
    {
        StateCategory.USER,
        StateCategory.NICE,
        StateCategory.SYSTEM,
        StateCategory.IRQ,
        StateCategory.SOFTIRQ,
        StateCategory.STEAL,
    }
)


@dataclass(frozen=True)
class CoreCounters:
    """Cumulative ticks per state category for one core, as of one read."""

    core: int
    times: Mapping[StateCategory, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for category, value in self.times.items():
            if value < 0:
                raise ValueError(
                    f"Negative counter for {category.value} on core {self.core}: {value}"
                )

    def total(self) -> int:
        return sum(self.times.values())

    def busy(self) -> int:
        return sum(value for category, value in self.times.items() if category in BUSY)


class CounterSource(abc.ABC):
    """Contract for anything that can report per-core cumulative CPU time."""

    NAME: str = ""

    @abc.abstractmethod
    def read(self) -> Sequence[CoreCounters]:
        """Return counters for every core active right now."""


def merge_times(pairs: Sequence[tuple[StateCategory, int]]) -> Dict[StateCategory, int]:
    """Fold (category, ticks) pairs into a mapping, summing repeated categories."""
    times: Dict[StateCategory, int] = {}
    for category, value in pairs:
        times[category] = times.get(category, 0) + value
    return times
