"""Retail transactions: revenue by month, category and shopper segments.

Retail has no binary outcome, so the predicate marks an invoice as a counted
order when its amount (``quantity * price``) is positive. Group ``value_sum``
carries revenue; ``positive_count`` is the number of counted orders.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from insights.aggregator import AggregationPass
from insights.assembler import NO_DATA, DashboardConfig, DimensionSpec, compute_dashboard
from insights.binning import AGE_DECADES, age_decade
from insights.filters import DashboardFilters
from insights.ranking import Ranked
from insights.records import Record, category_of, get_number, month_of


def invoice_amount(record: Record) -> float:
    return get_number(record, "quantity") * get_number(record, "price")


def _is_order(record: Record) -> bool:
    return invoice_amount(record) > 0


def _retail_kpis(agg: AggregationPass, groups: Dict[str, Ranked]) -> Dict[str, Any]:
    revenue = agg.positive_sums.get("revenue", 0.0)
    orders = agg.positive_count
    top_category = NO_DATA
    by_category = groups.get("by_category", [])
    if by_category and by_category[0][1].value_sum > 0:
        top_category = by_category[0][0]
    return {
        "total_revenue": revenue,
        "total_orders": orders,
        "avg_basket": revenue / orders if orders else 0.0,
        "total_quantity": agg.sums.get("quantity", 0.0),
        "avg_customer_age": agg.mean("age"),
        "top_category": top_category,
    }


RETAIL_DASHBOARD = DashboardConfig(
    name="retail",
    predicate=_is_order,
    dimensions=(
        DimensionSpec("by_month", month_of("invoice_date"), ranking="month", metric="value_sum"),
        DimensionSpec("by_category", category_of("category"), ranking="metric_desc", metric="value_sum"),
        DimensionSpec("by_gender", category_of("gender"), metric="total"),
        DimensionSpec("by_payment_method", category_of("payment_method"), ranking="metric_desc", metric="total"),
        DimensionSpec("by_age_decade", lambda r: age_decade(r.get("age")), ranking="domain", order=AGE_DECADES.labels),
        DimensionSpec("by_mall", category_of("shopping_mall"), ranking="metric_desc", metric="value_sum"),
    ),
    kpis=_retail_kpis,
    measures={
        "revenue": invoice_amount,
        "quantity": lambda r: get_number(r, "quantity"),
        "age": lambda r: get_number(r, "age"),
    },
    value=invoice_amount,
    id_field="invoice_no",
)


def compute_retail(
    records: List[Record],
    filters: Optional[DashboardFilters] = None,
    *,
    jitter: float = 0.0,
    with_charts: bool = False,
) -> Dict[str, Any]:
    return compute_dashboard(records, RETAIL_DASHBOARD, filters or DashboardFilters(), jitter=jitter, with_charts=with_charts)
