from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from insights.assembler import DashboardConfig
from insights.filters import DashboardFilters
from insights.metrics_hr import HR_DASHBOARD, compute_hr
from insights.metrics_retail import RETAIL_DASHBOARD, compute_retail
from insights.metrics_telecom import TELECOM_DASHBOARD, compute_telecom
from insights.records import Record

ComputeFn = Callable[..., Dict[str, Any]]

DASHBOARDS: Dict[str, DashboardConfig] = {
    "hr": HR_DASHBOARD,
    "telecom": TELECOM_DASHBOARD,
    "retail": RETAIL_DASHBOARD,
}

COMPUTE: Dict[str, ComputeFn] = {
    "hr": compute_hr,
    "telecom": compute_telecom,
    "retail": compute_retail,
}


def get_dashboard(name: str) -> Optional[DashboardConfig]:
    return DASHBOARDS.get(name)


def compute(name: str, records: List[Record], filters: Optional[DashboardFilters] = None, *, jitter: float = 0.0, with_charts: bool = False) -> Dict[str, Any]:
    try:
        fn = COMPUTE[name]
    except KeyError:
        raise KeyError(f"Unknown dashboard '{name}'") from None
    return fn(records, filters, jitter=jitter, with_charts=with_charts)
