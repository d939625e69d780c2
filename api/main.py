from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import DashboardFiltersModel, DatasetInfo, MetaDatasetsResponse, MetaListResponse
from insights.config import Settings
from insights.dashboards import DASHBOARDS, compute
from insights.data import DATASETS, load_records_or_empty
from insights.filters import DashboardFilters, apply_filters, normalize_filters
from insights.records import UNKNOWN, Record, get_category


app = FastAPI(title="Tabular Insights API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _available_fields(records: list[Record]) -> list[str]:
    fields: dict[str, None] = {}
    for record in records:
        for name in record:
            fields.setdefault(str(name), None)
    return list(fields)


def _filters_from_model(model: DashboardFiltersModel, *, records: list[Record], default_top_n: int) -> DashboardFilters:
    raw = model.model_dump()
    fields = _available_fields(records) if records else None
    return normalize_filters(raw, available_fields=fields, default_top_n=default_top_n)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _unknown_dataset(dataset: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"Unknown dataset '{dataset}'", "type": "NotFound"})


@app.get("/meta/datasets")
def meta_datasets():
    infos = [DatasetInfo(name=name, filename=src.filename, id_field=src.id_field) for name, src in DATASETS.items()]
    return _json(MetaDatasetsResponse(datasets=infos).model_dump())


@app.get("/meta/values/{dataset}/{field}")
def meta_values(dataset: str, field: str, limit: int = Query(default=500, ge=1, le=5000)):
    if dataset not in DATASETS:
        return _unknown_dataset(dataset)
    try:
        records = load_records_or_empty(dataset, Settings.from_env().data_dir)
        values = {get_category(record, field) for record in records if field in record}
        # "Unknown" is selectable but listed last.
        ordered = sorted(v for v in values if v != UNKNOWN)
        if UNKNOWN in values:
            ordered.append(UNKNOWN)
        return _json(MetaListResponse(values=ordered[:limit]).model_dump())
    except Exception as exc:
        logger.exception("meta_values failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.post("/dashboard/{dataset}")
def dashboard(dataset: str, filters: DashboardFiltersModel, charts: bool = Query(default=False)):
    if dataset not in DASHBOARDS:
        return _unknown_dataset(dataset)
    try:
        settings = Settings.from_env()
        records = load_records_or_empty(dataset, settings.data_dir)
        f = _filters_from_model(filters, records=records, default_top_n=settings.risk_limit)
        return _json(compute(dataset, records, f, jitter=settings.risk_jitter, with_charts=charts))
    except Exception as exc:
        logger.exception("dashboard failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.post("/export/{dataset}")
def export_dataset(dataset: str, filters: DashboardFiltersModel):
    if dataset not in DATASETS:
        return _unknown_dataset(dataset)
    try:
        settings = Settings.from_env()
        records = load_records_or_empty(dataset, settings.data_dir)
        f = _filters_from_model(filters, records=records, default_top_n=settings.risk_limit)
        filtered = apply_filters(records, f, id_field=DATASETS[dataset].id_field)
        export_df = pd.DataFrame(filtered, columns=_available_fields(records))
        csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    except Exception as exc:
        logger.exception("export failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})

    filename = f"{dataset}.csv"
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
