"""Single-pass grouping of records into per-category outcome counts."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence

from insights.records import UNKNOWN, Record

Extractor = Callable[[Record], str]
Predicate = Callable[[Record], bool]
ValueFn = Callable[[Record], float]


@dataclass
class GroupStat:
    positive_count: int = 0
    total: int = 0
    value_sum: float = 0.0

    @property
    def rate(self) -> float:
        return self.positive_count / self.total if self.total else 0.0

    @property
    def mean_value(self) -> float:
        return self.value_sum / self.total if self.total else 0.0

    def as_dict(self) -> Dict[str, object]:
        return {
            "positive_count": self.positive_count,
            "total": self.total,
            "rate": self.rate,
            "value_sum": self.value_sum,
        }


# Plain dicts keep first-seen key order.
GroupedResult = Dict[str, GroupStat]


@dataclass(frozen=True)
class Dimension:
    name: str
    extractor: Extractor


@dataclass
class AggregationPass:
    record_count: int = 0
    positive_count: int = 0
    sums: Dict[str, float] = field(default_factory=dict)
    positive_sums: Dict[str, float] = field(default_factory=dict)
    groups: Dict[str, GroupedResult] = field(default_factory=dict)

    @property
    def rate(self) -> float:
        return self.positive_count / self.record_count if self.record_count else 0.0

    def mean(self, measure: str) -> float:
        if not self.record_count:
            return 0.0
        return self.sums.get(measure, 0.0) / self.record_count


def _key_for(extractor: Extractor, record: Record) -> str:
    key = extractor(record)
    if not key:
        return UNKNOWN
    return str(key)


def _tally(grouped: Dict[str, GroupStat], key: str, positive: bool, value: float) -> None:
    stat = grouped[key]
    stat.total += 1
    if positive:
        stat.positive_count += 1
    stat.value_sum += value


def aggregate(
    records: Iterable[Record],
    extractor: Extractor,
    predicate: Predicate,
    value: Optional[ValueFn] = None,
) -> GroupedResult:
    grouped: Dict[str, GroupStat] = defaultdict(GroupStat)
    for record in records:
        amount = value(record) if value is not None else 0.0
        _tally(grouped, _key_for(extractor, record), bool(predicate(record)), amount)
    return dict(grouped)


def aggregate_pass(
    records: Iterable[Record],
    dimensions: Sequence[Dimension],
    predicate: Predicate,
    measures: Optional[Mapping[str, ValueFn]] = None,
    value: Optional[ValueFn] = None,
) -> AggregationPass:
    """Group by every dimension and total every measure in one walk over ``records``.

    ``value`` feeds each group's ``value_sum`` (e.g. revenue per category); ``measures``
    are record-level numbers summed into the KPI scalars.
    """
    measures = dict(measures or {})
    result = AggregationPass(
        sums={name: 0.0 for name in measures},
        positive_sums={name: 0.0 for name in measures},
    )
    grouped: Dict[str, Dict[str, GroupStat]] = {dim.name: defaultdict(GroupStat) for dim in dimensions}

    for record in records:
        positive = bool(predicate(record))
        result.record_count += 1
        if positive:
            result.positive_count += 1
        for name, fn in measures.items():
            amount = fn(record)
            result.sums[name] += amount
            if positive:
                result.positive_sums[name] += amount
        group_value = value(record) if value is not None else 0.0
        for dim in dimensions:
            _tally(grouped[dim.name], _key_for(dim.extractor, record), positive, group_value)

    result.groups = {name: dict(stats) for name, stats in grouped.items()}
    return result
