"""Grouping and summary statistics over normalized listings."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, TypeVar

from .models import GroupSummary, MeasureStats, NormalizedRecord, SetPartition

logger = logging.getLogger(__name__)

R = TypeVar("R")

# measure name -> accessor returning the value, or None when absent
Measures = Dict[str, Callable[[Any], Optional[float]]]


@dataclass
class Accumulator:
    """Running count plus per-measure sum and present-count for one group."""
    count: int = 0
    sums: Dict[str, float] = field(default_factory=dict)
    present: Dict[str, int] = field(default_factory=dict)

    def add(self, record: Any, measures: Measures) -> "Accumulator":
        self.count += 1
        for name, value_of in measures.items():
            value = value_of(record)
            if value is None:
                continue
            self.sums[name] = self.sums.get(name, 0) + value
            self.present[name] = self.present.get(name, 0) + 1
        return self

    def finalize(self, key: Hashable, measures: Measures) -> GroupSummary:
        averages = {}
        for name in measures:
            present = self.present.get(name, 0)
            averages[name] = self.sums[name] / present if present else 0.0
        return GroupSummary(key=key, count=self.count, averages=averages)


def _sort_key(primary: Optional[str]):
    if primary is None:
        return lambda s: (-s.count, s.key)
    return lambda s: (-s.count, -s.average(primary), s.key)


def aggregate(
    records: Iterable[R],
    key: Callable[[R], Hashable],
    measures: Optional[Measures] = None,
    primary: Optional[str] = None,
) -> List[GroupSummary]:
    """
    Group records by ``key`` and summarize each group.

    Averages only count members where the measure is present; a group with no
    such member averages 0. Groups are ordered by count descending, then the
    ``primary`` measure's average descending (when given), then key ascending.
    """
    measures = measures or {}
    if primary is not None and primary not in measures:
        raise ValueError(f"Unknown primary measure: {primary}")

    groups: Dict[Hashable, Accumulator] = {}
    for record in records:
        group_key = key(record)
        groups.setdefault(group_key, Accumulator()).add(record, measures)

    summaries = [acc.finalize(group_key, measures) for group_key, acc in groups.items()]
    summaries.sort(key=_sort_key(primary))
    return summaries


def measure_stats(
    records: Iterable[R],
    value: Callable[[R], Optional[float]],
    low: Optional[Callable[[R], Optional[float]]] = None,
    high: Optional[Callable[[R], Optional[float]]] = None,
) -> MeasureStats:
    """
    Overall min / max / average of one measure across all records.

    Records without the measure are left out entirely. ``low`` and ``high``
    pick the value used for the minimum and maximum (default: ``value``).
    """
    low = low or value
    high = high or value
    acc = Accumulator()
    minimum = maximum = None
    for record in records:
        if value(record) is None:
            continue
        acc.add(record, {"value": value})
        lo, hi = low(record), high(record)
        if lo is not None:
            minimum = lo if minimum is None else min(minimum, lo)
        if hi is not None:
            maximum = hi if maximum is None else max(maximum, hi)

    if acc.count == 0:
        return MeasureStats()
    summary = acc.finalize(None, {"value": value})
    return MeasureStats(
        present=acc.count,
        minimum=minimum if minimum is not None else 0,
        maximum=maximum if maximum is not None else 0,
        average=summary.average("value"),
        total=acc.sums.get("value", 0),
    )


def top_by(
    records: Iterable[NormalizedRecord], value: Callable[[Any], float], limit: Optional[int] = None
) -> List[Any]:
    """Records by ``value`` descending, ties broken by title."""
    return sorted(records, key=lambda r: (-value(r), r.title))[:limit]


def dedupe_by_id(
    records: Iterable[R], identifier: Callable[[R], Optional[str]] = lambda r: r.id
) -> List[R]:
    """Keep the first record per identifier; records without one are dropped."""
    seen = set()
    unique = []
    skipped = 0
    for record in records:
        ident = identifier(record)
        if ident is None:
            skipped += 1
            continue
        if ident in seen:
            continue
        seen.add(ident)
        unique.append(record)
    if skipped:
        logger.warning(f"Dropped {skipped} records without an identifier")
    return unique


def partition_by_id(
    a: Sequence[R],
    b: Sequence[R],
    identifier: Callable[[R], Optional[str]] = lambda r: r.id,
) -> SetPartition:
    """Split two collections into records only in A, in both, and only in B."""
    unique_a = dedupe_by_id(a, identifier)
    unique_b = dedupe_by_id(b, identifier)
    ids_a = {identifier(r) for r in unique_a}
    ids_b = {identifier(r) for r in unique_b}

    return SetPartition(
        only_a=[r for r in unique_a if identifier(r) not in ids_b],
        common=[r for r in unique_a if identifier(r) in ids_b],
        only_b=[r for r in unique_b if identifier(r) not in ids_a],
    )
