from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from insights.aggregator import GroupedResult, GroupStat

Ranked = List[Tuple[str, GroupStat]]

RANKING_POLICIES = ("insertion", "domain", "natural", "month", "metric_desc")
METRICS = ("rate", "value_sum", "total", "positive_count")

_MONTH_KEY = re.compile(r"^(\d{4})-(\d{1,2})$")
_NATURAL_SPLIT = re.compile(r"(\d+)")


def insertion_order(grouped: GroupedResult) -> Ranked:
    return list(grouped.items())


def domain_order(grouped: GroupedResult, order: Sequence[str]) -> Ranked:
    """Present labels in the fixed ``order``; absent labels are skipped, never zero-filled.

    Labels outside ``order`` (typically "Unknown") trail in first-seen order.
    """
    listed = set(order)
    ranked = [(label, grouped[label]) for label in order if label in grouped]
    ranked += [(label, stat) for label, stat in grouped.items() if label not in listed]
    return ranked


def _natural_key(label: str) -> Tuple[Tuple[int, object], ...]:
    parts = []
    for chunk in _NATURAL_SPLIT.split(label):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk.lower()))
    return tuple(parts)


def natural_order(grouped: GroupedResult) -> Ranked:
    return sorted(grouped.items(), key=lambda item: _natural_key(item[0]))


def _month_key(label: str) -> Tuple[int, int, int]:
    match = _MONTH_KEY.match(label)
    if not match:
        return (1, 0, 0)
    return (0, int(match.group(1)), int(match.group(2)))


def month_order(grouped: GroupedResult) -> Ranked:
    # (year, month) as integers; year must dominate across year boundaries.
    return sorted(grouped.items(), key=lambda item: _month_key(item[0]))


def metric_descending(grouped: GroupedResult, metric: str = "rate") -> Ranked:
    if metric not in METRICS:
        raise ValueError(f"Unknown metric '{metric}'")
    # sorted() is stable: equal metrics keep first-seen order.
    return sorted(grouped.items(), key=lambda item: -getattr(item[1], metric))


def rank(grouped: GroupedResult, policy: str = "insertion", *, order: Sequence[str] = (), metric: str = "rate") -> Ranked:
    if policy == "insertion":
        return insertion_order(grouped)
    if policy == "domain":
        return domain_order(grouped, order)
    if policy == "natural":
        return natural_order(grouped)
    if policy == "month":
        return month_order(grouped)
    if policy == "metric_desc":
        return metric_descending(grouped, metric)
    raise ValueError(f"Unknown ranking policy '{policy}'")


def top_n(ranked: Ranked, n: int) -> Ranked:
    return ranked[: max(0, n)]
