from __future__ import annotations

from typing import Any, Dict, List, Optional

from insights.aggregator import AggregationPass
from insights.assembler import NO_DATA, DashboardConfig, DimensionSpec, compute_dashboard
from insights.binning import CHARGE_BANDS, TENURE_BANDS, charge_band, tenure_band
from insights.filters import DashboardFilters
from insights.ranking import Ranked
from insights.records import Record, category_of, flag_of, get_flag, number_of
from insights.risk import CHURN_PROFILE


def _churn_label(record: Record) -> str:
    return "Yes" if get_flag(record, "Churn") else "No"


def _telecom_kpis(agg: AggregationPass, groups: Dict[str, Ranked]) -> Dict[str, Any]:
    by_contract = groups.get("by_contract", [])
    return {
        "total_customers": agg.record_count,
        "churned_customers": agg.positive_count,
        "churn_rate": agg.rate,
        "avg_tenure": agg.mean("tenure"),
        "avg_monthly_charges": agg.mean("monthly_charges"),
        # Revenue walking out of the door each month.
        "monthly_charges_lost": agg.positive_sums.get("monthly_charges", 0.0),
        "highest_churn_contract": by_contract[0][0] if by_contract else NO_DATA,
    }


TELECOM_DASHBOARD = DashboardConfig(
    name="telecom",
    predicate=flag_of("Churn"),
    dimensions=(
        DimensionSpec("overall", _churn_label, ranking="domain", order=("Yes", "No")),
        DimensionSpec("by_contract", category_of("Contract"), ranking="metric_desc"),
        DimensionSpec("by_internet_service", category_of("InternetService"), ranking="metric_desc"),
        DimensionSpec("by_tenure_band", lambda r: tenure_band(r.get("tenure")), ranking="domain", order=TENURE_BANDS.labels),
        DimensionSpec(
            "by_charge_band",
            lambda r: charge_band(r.get("MonthlyCharges")),
            ranking="domain",
            order=CHARGE_BANDS.labels,
        ),
        DimensionSpec("by_payment_method", category_of("PaymentMethod"), ranking="metric_desc"),
    ),
    kpis=_telecom_kpis,
    measures={
        "tenure": number_of("tenure"),
        "monthly_charges": number_of("MonthlyCharges"),
    },
    value=number_of("MonthlyCharges"),
    id_field="customerID",
    risk_profile=CHURN_PROFILE,
    risk_eligible=lambda r: not get_flag(r, "Churn"),
    risk_fields=("Contract", "tenure", "MonthlyCharges", "InternetService"),
)


def compute_telecom(
    records: List[Record],
    filters: Optional[DashboardFilters] = None,
    *,
    jitter: float = 0.0,
    with_charts: bool = False,
) -> Dict[str, Any]:
    return compute_dashboard(records, TELECOM_DASHBOARD, filters or DashboardFilters(), jitter=jitter, with_charts=with_charts)
