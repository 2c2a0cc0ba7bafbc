from dataclasses import dataclass

from ..counters import wrap
from .sampler import AggregateSnapshot

REPORT_TEMPLATE = "average CPU load in last {period} seconds (all cores averaged): {percent}%"


@dataclass(frozen=True)
class UsageSample:
    """Busy share of the time elapsed between two snapshots."""

    total_delta: int
    relevant_delta: int
    percent: int


def compute_usage(previous: AggregateSnapshot, current: AggregateSnapshot) -> UsageSample:
    """Compute the busy percentage between two snapshots.

    Deltas are taken modulo the counter word. A counter that reset or
    overflowed between the snapshots therefore yields one huge delta and a
    meaningless percent for that interval only; the next interval is correct
    again. Integer division truncates, and an empty interval reports 0.
    """
    total_delta = wrap(current.total - previous.total)
    relevant_delta = wrap(current.relevant - previous.relevant)
    if total_delta == 0:
        percent = 0
    else:
        percent = wrap(100 * relevant_delta) // total_delta
    return UsageSample(
        total_delta=total_delta,
        relevant_delta=relevant_delta,
        percent=percent,
    )


def format_report(sample: UsageSample, period: int) -> str:
    return REPORT_TEMPLATE.format(period=period, percent=sample.percent)
