import altair as alt
import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from insights.aggregator import GroupStat
from insights.charts import group_chart
from insights.config import Settings
from insights.dashboards import DASHBOARDS, compute
from insights.data import DATASETS, load_records_or_empty
from insights.filters import apply_filters, normalize_filters
from insights.records import get_category

alt.data_transformers.disable_max_rows()

SETTINGS = Settings.from_env()

PAGE_TITLES = {
    "hr": "HR Attrition",
    "telecom": "Telecom Churn",
    "retail": "Retail Sales",
}

# Fields offered as sidebar pickers, per dataset.
FILTER_FIELDS = {
    "hr": ["Department", "JobRole", "Gender", "OverTime"],
    "telecom": ["Contract", "InternetService", "PaymentMethod", "gender"],
    "retail": ["category", "gender", "payment_method", "shopping_mall"],
}

KPI_LABELS: Dict[str, Dict[str, str]] = {
    "hr": {
        "total_employees": "Employees",
        "attrition_rate": "Attrition rate",
        "avg_age": "Avg age",
        "avg_years_at_company": "Avg years at company",
        "highest_attrition_department": "Highest-attrition dept",
    },
    "telecom": {
        "total_customers": "Customers",
        "churn_rate": "Churn rate",
        "avg_tenure": "Avg tenure (months)",
        "avg_monthly_charges": "Avg monthly charges",
        "highest_churn_contract": "Highest-churn contract",
    },
    "retail": {
        "total_revenue": "Revenue",
        "total_orders": "Orders",
        "avg_basket": "Avg basket",
        "top_category": "Top category",
    },
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(selected: Dict[str, List[str]], query: str) -> str:
    chips = [f"{name}: {', '.join(values)}" for name, values in selected.items()] or ["All records"]
    if query:
        chips.append(f"ID contains: {query}")
    return "".join([f"<span class='chip'>{txt}</span>" for txt in chips])


def format_kpi(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if name.endswith("_rate"):
        return f"{value:.1%}"
    if name in {"total_revenue", "avg_basket", "avg_monthly_charges"}:
        return f"₹{value:,.0f}"
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:,.1f}"


def render_kpis(dataset: str, kpis: Dict[str, Any]):
    labels = KPI_LABELS.get(dataset, {})
    cols = st.columns(len(labels) or 1)
    for col, (name, label) in zip(cols, labels.items()):
        col.metric(label, format_kpi(name, kpis.get(name, 0)))


def render_groups(dataset: str, payload: Dict[str, Any]):
    config = DASHBOARDS[dataset]
    groups = payload["ranked"]
    specs = list(config.dimensions)
    for i in range(0, len(specs), 2):
        cols = st.columns(2)
        for col, spec in zip(cols, specs[i : i + 2]):
            ranked = groups.get(spec.name, [])
            with col:
                with card(spec.name.replace("_", " ").capitalize()):
                    if not ranked:
                        st.info("No data for the current filters.")
                        continue
                    st.altair_chart(group_chart(ranked, metric=spec.metric), use_container_width=True)


def render_risk_list(rows: List[Dict[str, Any]]):
    with card("Highest risk"):
        if not rows:
            st.info("No records eligible for risk scoring.")
            return
        df = pd.DataFrame(rows)
        df["factors"] = df["factors"].apply(lambda f: ", ".join(f))
        st.dataframe(df, use_container_width=True, hide_index=True)


# ---------- UI setup ----------
st.set_page_config(page_title="Tabular Insights", layout="wide")
inject_base_styles()

with st.sidebar:
    st.markdown("### Navigate")
    dataset = st.radio("Dataset", list(DATASETS), format_func=lambda d: PAGE_TITLES.get(d, d), index=0)

records = load_records_or_empty(dataset, SETTINGS.data_dir)
if not records:
    st.warning(f"No rows loaded for {PAGE_TITLES[dataset]}. Place {DATASETS[dataset].filename} in {SETTINGS.data_dir}.")

with st.sidebar:
    st.markdown("---")
    st.markdown("### Quick filters")
    selected: Dict[str, List[str]] = {}
    for field in FILTER_FIELDS.get(dataset, []):
        options = sorted({get_category(r, field) for r in records})
        picked = st.multiselect(field, options=options, default=[])
        if picked:
            selected[field] = picked
    query = st.text_input("ID search (optional)", "")
    with st.expander("Advanced settings", expanded=False):
        top_n = st.slider("Risk list length", min_value=5, max_value=50, value=SETTINGS.risk_limit, step=5)

filters = normalize_filters({"selected": selected, "top_n": top_n, "query": query}, default_top_n=SETTINGS.risk_limit)
payload = compute(dataset, records, filters, jitter=SETTINGS.risk_jitter)

# Rebuild ranked pairs from the payload rows so charts keep the dashboard ordering.
payload["ranked"] = {
    name: [(row["label"], GroupStat(row["positive_count"], row["total"], row["value_sum"])) for row in rows]
    for name, rows in payload["groups"].items()
}

st.markdown(
    f"<div class='app-top-bar'><div class='page-title'>{PAGE_TITLES[dataset]}</div></div>",
    unsafe_allow_html=True,
)
st.markdown(f"<div class='chip-row'>{format_filter_summary(filters.selected, filters.query)}</div>", unsafe_allow_html=True)

export_df: Optional[pd.DataFrame] = None
if records:
    export_df = pd.DataFrame(apply_filters(records, filters, id_field=DATASETS[dataset].id_field))
    st.download_button(
        "Export CSV",
        data=export_df.to_csv(index=False).encode("utf-8"),
        file_name=f"{dataset}.csv",
        mime="text/csv",
    )

render_kpis(dataset, payload["kpis"])
render_groups(dataset, payload)
if DASHBOARDS[dataset].risk_profile is not None:
    render_risk_list(payload["risk_list"])
