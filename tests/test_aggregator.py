from __future__ import annotations

import pytest

from insights.aggregator import Dimension, GroupStat, aggregate, aggregate_pass
from insights.records import category_of, flag_of, number_of

SCENARIO = [
    {"category": "A", "outcome": "Yes", "amount": 10},
    {"category": "A", "outcome": "Yes", "amount": 5},
    {"category": "A", "outcome": "No", "amount": "bad"},
    {"category": "B", "outcome": "Yes", "amount": 1},
]


def test_aggregate_scenario():
    grouped = aggregate(SCENARIO, category_of("category"), flag_of("outcome"))
    assert list(grouped) == ["A", "B"]
    assert (grouped["A"].positive_count, grouped["A"].total) == (2, 3)
    assert (grouped["B"].positive_count, grouped["B"].total) == (1, 1)
    assert grouped["A"].rate == pytest.approx(2 / 3)


def test_totals_cover_every_record():
    rows = SCENARIO + [{"category": None, "outcome": None}, {"outcome": "Yes"}]
    grouped = aggregate(rows, category_of("category"), flag_of("outcome"))
    assert sum(stat.total for stat in grouped.values()) == len(rows)
    assert all(stat.positive_count <= stat.total for stat in grouped.values())
    assert grouped["Unknown"].total == 2
    assert grouped["Unknown"].positive_count == 1


def test_empty_key_from_extractor_becomes_unknown():
    grouped = aggregate([{"x": 1}, {"x": 2}], lambda r: "", lambda r: False)
    assert list(grouped) == ["Unknown"]
    assert grouped["Unknown"].total == 2


def test_zero_total_rate_is_zero():
    stat = GroupStat()
    assert stat.rate == 0.0
    assert stat.mean_value == 0.0


def test_value_sum_per_group():
    grouped = aggregate(SCENARIO, category_of("category"), flag_of("outcome"), number_of("amount"))
    assert grouped["A"].value_sum == 15.0
    assert grouped["B"].value_sum == 1.0


def test_aggregate_pass_computes_kpis_and_groups_together():
    calls = []

    def outcome(record):
        calls.append(record)
        return record.get("outcome") == "Yes"

    result = aggregate_pass(
        SCENARIO,
        [Dimension("by_category", category_of("category")), Dimension("by_outcome", category_of("outcome"))],
        outcome,
        measures={"amount": number_of("amount")},
    )
    # One predicate call per record: a single walk.
    assert len(calls) == len(SCENARIO)
    assert result.record_count == 4
    assert result.positive_count == 3
    assert result.rate == 0.75
    assert result.sums["amount"] == 16.0
    assert result.positive_sums["amount"] == 16.0
    assert result.mean("amount") == 4.0
    assert result.groups["by_category"]["A"].total == 3
    assert result.groups["by_outcome"]["No"].positive_count == 0


def test_aggregate_pass_accepts_a_generator():
    rows = (row for row in SCENARIO)
    result = aggregate_pass(rows, [Dimension("c", category_of("category"))], flag_of("outcome"))
    assert result.record_count == 4
    assert sum(s.total for s in result.groups["c"].values()) == 4


def test_empty_input():
    result = aggregate_pass([], [Dimension("c", category_of("category"))], flag_of("outcome"), {"amount": number_of("amount")})
    assert result.record_count == 0
    assert result.rate == 0.0
    assert result.mean("amount") == 0.0
    assert result.groups == {"c": {}}
