from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

from insights.ranking import Ranked

alt.data_transformers.disable_max_rows()

_METRIC_TITLES = {
    "rate": "Rate",
    "value_sum": "Value",
    "total": "Count",
    "positive_count": "Positive count",
}


def ranked_frame(ranked: Ranked) -> pd.DataFrame:
    rows = [dict(label=label, **stat.as_dict()) for label, stat in ranked]
    return pd.DataFrame(rows, columns=["label", "positive_count", "total", "rate", "value_sum"])


def group_chart(ranked: Ranked, *, metric: str = "rate", title: str = "") -> alt.Chart:
    """Bar chart of one grouped dimension, bars kept in the ranked order."""
    df = ranked_frame(ranked)
    order: List[str] = df["label"].tolist()
    y_axis = alt.Axis(format="%") if metric == "rate" else alt.Axis()
    return (
        alt.Chart(df, title=title)
        .mark_bar()
        .encode(
            x=alt.X("label:N", sort=order, title=None),
            y=alt.Y(f"{metric}:Q", title=_METRIC_TITLES.get(metric, metric), axis=y_axis),
            tooltip=["label", "positive_count", "total", alt.Tooltip("rate:Q", format=".1%"), "value_sum"],
        )
    )


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def dashboard_charts(groups: Dict[str, Ranked], metrics: Dict[str, str]) -> Dict[str, Dict[str, Any]]:
    return {
        name: to_vega_spec(group_chart(ranked, metric=metrics.get(name, "rate"), title=name.replace("_", " ")))
        for name, ranked in groups.items()
    }
