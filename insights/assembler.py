"""Turn a record set plus a dashboard configuration into one renderable result."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from insights.aggregator import AggregationPass, Dimension, Extractor, Predicate, ValueFn, aggregate_pass
from insights.charts import dashboard_charts
from insights.filters import DashboardFilters, apply_filters
from insights.ranking import Ranked, rank
from insights.records import UNKNOWN, Record, get_id
from insights.risk import ScoringProfile, score

logger = logging.getLogger(__name__)

NO_DATA = "No data"

KpiFn = Callable[[AggregationPass, Dict[str, Ranked]], Dict[str, Any]]


@dataclass(frozen=True)
class DimensionSpec:
    name: str
    extractor: Extractor
    ranking: str = "insertion"
    order: Tuple[str, ...] = ()
    metric: str = "rate"


@dataclass(frozen=True)
class DashboardConfig:
    name: str
    predicate: Predicate
    dimensions: Tuple[DimensionSpec, ...]
    kpis: KpiFn
    measures: Mapping[str, ValueFn] = field(default_factory=dict)
    value: Optional[ValueFn] = None
    id_field: Optional[str] = None
    risk_profile: Optional[ScoringProfile] = None
    risk_eligible: Optional[Predicate] = None
    risk_fields: Tuple[str, ...] = ()


@dataclass
class DashboardResult:
    kpis: Dict[str, Any]
    groups: Dict[str, Ranked]
    risk_list: List[Dict[str, Any]]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "kpis": dict(self.kpis),
            "groups": {
                name: [dict(label=label, **stat.as_dict()) for label, stat in ranked]
                for name, ranked in self.groups.items()
            },
            "risk_list": [dict(item) for item in self.risk_list],
        }


def _find_dimension(config: DashboardConfig, name: str) -> Optional[DimensionSpec]:
    for spec in config.dimensions:
        if spec.name == name:
            return spec
    return None


def _baseline_fn(config: DashboardConfig, profile: ScoringProfile, aggregation: AggregationPass) -> Callable[[Record], float]:
    """Group rate (percent) of the record's category on the profile's baseline dimension."""
    if not profile.baseline_dimension:
        return lambda record: 0.0
    spec = _find_dimension(config, profile.baseline_dimension)
    if spec is None:
        logger.warning("Scoring profile %s references unknown dimension %s", profile.name, profile.baseline_dimension)
        return lambda record: 0.0
    groups = aggregation.groups.get(spec.name, {})

    def baseline(record: Record) -> float:
        stat = groups.get(spec.extractor(record) or UNKNOWN)
        return stat.rate * 100.0 if stat is not None else 0.0

    return baseline


def build_risk_list(
    records: Sequence[Record],
    config: DashboardConfig,
    aggregation: AggregationPass,
    *,
    limit: Optional[int] = None,
    jitter: float = 0.0,
) -> List[Dict[str, Any]]:
    profile = config.risk_profile
    if profile is None:
        return []

    baseline_for = _baseline_fn(config, profile, aggregation)
    eligible = config.risk_eligible or (lambda record: True)
    rows: List[Dict[str, Any]] = []
    for record in records:
        if not eligible(record):
            continue
        record_id = get_id(record, config.id_field)
        assessment = score(record, profile, baseline=baseline_for(record), record_id=record_id, jitter=jitter)
        row: Dict[str, Any] = {"id": record_id}
        for name in config.risk_fields:
            row[name] = record.get(name)
        row.update(assessment.as_dict())
        rows.append(row)

    # Stable: equal scores keep input order.
    rows.sort(key=lambda row: -row["score"])
    if limit is not None:
        rows = rows[: max(0, limit)]
    return rows


def assemble(
    records: Sequence[Record],
    config: DashboardConfig,
    *,
    top_n: Optional[int] = None,
    jitter: float = 0.0,
) -> DashboardResult:
    records = list(records or [])
    dimensions = [Dimension(spec.name, spec.extractor) for spec in config.dimensions]
    aggregation = aggregate_pass(records, dimensions, config.predicate, config.measures, config.value)

    groups: Dict[str, Ranked] = {}
    for spec in config.dimensions:
        groups[spec.name] = rank(aggregation.groups[spec.name], spec.ranking, order=spec.order, metric=spec.metric)

    kpis = config.kpis(aggregation, groups)
    risk_list = build_risk_list(records, config, aggregation, limit=top_n, jitter=jitter)
    logger.debug("Assembled %s dashboard over %d records", config.name, aggregation.record_count)
    return DashboardResult(kpis=kpis, groups=groups, risk_list=risk_list)


def compute_dashboard(
    records: Sequence[Record],
    config: DashboardConfig,
    filters: DashboardFilters,
    *,
    jitter: float = 0.0,
    with_charts: bool = False,
) -> Dict[str, Any]:
    """Filter, assemble and render a dashboard payload (JSON-serializable).

    With ``with_charts`` the payload also carries one Vega-Lite bar chart per dimension.
    """
    filtered = apply_filters(records or [], filters, id_field=config.id_field)
    result = assemble(filtered, config, top_n=filters.top_n, jitter=jitter)
    payload: Dict[str, Any] = {"dataset": config.name, "filters": asdict(filters)}
    payload.update(result.as_dict())
    payload["record_count"] = len(filtered)
    if with_charts:
        metrics = {spec.name: spec.metric for spec in config.dimensions}
        payload["charts"] = dashboard_charts(result.groups, metrics)
    return payload
