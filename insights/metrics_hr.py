from __future__ import annotations

from typing import Any, Dict, List, Optional

from insights.aggregator import AggregationPass
from insights.assembler import NO_DATA, DashboardConfig, DimensionSpec, compute_dashboard
from insights.binning import AGE_BANDS, INCOME_BANDS, age_band, income_band
from insights.filters import DashboardFilters
from insights.ranking import Ranked
from insights.records import Record, category_of, flag_of, get_flag, number_of
from insights.risk import ATTRITION_PROFILE


def _attrition_label(record: Record) -> str:
    return "Yes" if get_flag(record, "Attrition") else "No"


def _top_label(ranked: Ranked) -> str:
    return ranked[0][0] if ranked else NO_DATA


def _hr_kpis(agg: AggregationPass, groups: Dict[str, Ranked]) -> Dict[str, Any]:
    return {
        "total_employees": agg.record_count,
        "attrition_count": agg.positive_count,
        "attrition_rate": agg.rate,
        "avg_age": agg.mean("age"),
        "avg_years_at_company": agg.mean("years_at_company"),
        "avg_monthly_income": agg.mean("monthly_income"),
        "highest_attrition_department": _top_label(groups.get("by_department", [])),
        "highest_attrition_role": _top_label(groups.get("by_job_role", [])),
    }


HR_DASHBOARD = DashboardConfig(
    name="hr",
    predicate=flag_of("Attrition"),
    dimensions=(
        DimensionSpec("overall", _attrition_label, ranking="domain", order=("Yes", "No")),
        DimensionSpec("by_department", category_of("Department"), ranking="metric_desc"),
        DimensionSpec("by_job_role", category_of("JobRole"), ranking="metric_desc"),
        DimensionSpec("by_age_band", lambda r: age_band(r.get("Age")), ranking="domain", order=AGE_BANDS.labels),
        DimensionSpec(
            "by_income_band",
            lambda r: income_band(r.get("MonthlyIncome")),
            ranking="domain",
            order=INCOME_BANDS.labels,
        ),
        DimensionSpec("by_overtime", category_of("OverTime"), ranking="natural"),
    ),
    kpis=_hr_kpis,
    measures={
        "age": number_of("Age"),
        "years_at_company": number_of("YearsAtCompany"),
        "monthly_income": number_of("MonthlyIncome"),
    },
    id_field="EmployeeNumber",
    risk_profile=ATTRITION_PROFILE,
    # Only people still on payroll can leave.
    risk_eligible=lambda r: not get_flag(r, "Attrition"),
    risk_fields=("Department", "JobRole", "OverTime", "YearsAtCompany", "MonthlyIncome"),
)


def compute_hr(
    records: List[Record],
    filters: Optional[DashboardFilters] = None,
    *,
    jitter: float = 0.0,
    with_charts: bool = False,
) -> Dict[str, Any]:
    return compute_dashboard(records, HR_DASHBOARD, filters or DashboardFilters(), jitter=jitter, with_charts=with_charts)
