"""CSV loading for the three dashboard datasets.

Loading is the only place that can fail hard; everything downstream works on the
plain ``list[dict]`` returned here and accepts an empty list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from insights.config import Settings
from insights.records import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetSource:
    filename: str
    id_field: str


DATASETS: Dict[str, DatasetSource] = {
    "hr": DatasetSource("hr-attrition.csv", "EmployeeNumber"),
    "telecom": DatasetSource("telco-churn.csv", "customerID"),
    "retail": DatasetSource("retail-shopping.csv", "invoice_no"),
}


class LoadError(RuntimeError):
    """Raised when a dataset file cannot be read or lacks its id column."""


def get_source(dataset: str) -> DatasetSource:
    try:
        return DATASETS[dataset]
    except KeyError:
        raise LoadError(f"Unknown dataset '{dataset}'") from None


def file_signature(path: Path) -> Tuple[str, float]:
    return str(path), path.stat().st_mtime


def frame_to_records(df: pd.DataFrame) -> List[Dict[str, object]]:
    if df.empty:
        return []
    cleaned = df.astype(object).where(df.notna(), None)
    return cleaned.to_dict(orient="records")


def read_records(csv_path: Path, id_field: Optional[str] = None) -> List[Dict[str, object]]:
    try:
        df = pd.read_csv(csv_path, encoding="utf-8-sig", skipinitialspace=True)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise LoadError(f"Could not read {csv_path}: {exc}") from exc
    except pd.errors.EmptyDataError:
        return []

    df.columns = [str(c).strip() for c in df.columns]
    df = df.dropna(how="all")
    if id_field:
        if id_field not in df.columns:
            raise LoadError(f"{csv_path.name} missing id column '{id_field}'")
        ids = df[id_field].astype("string").str.strip()
        df = df[ids.notna() & (ids != "")]
    return frame_to_records(df)


@lru_cache(maxsize=8)
def _read_records_cached(signature: Tuple[str, float], id_field: Optional[str]) -> Tuple[Dict[str, object], ...]:
    path = Path(signature[0])
    rows = read_records(path, id_field)
    logger.info("Loaded %d rows from %s", len(rows), path.name)
    return tuple(rows)


def load_records(dataset: str, data_dir: Optional[Path] = None) -> List[Record]:
    source = get_source(dataset)
    data_dir = data_dir or Settings.from_env().data_dir
    path = Path(data_dir) / source.filename
    if not path.exists():
        raise LoadError(f"Dataset file not found: {path}")
    # Fresh dicts per call; the cached rows are never handed out.
    return [dict(row) for row in _read_records_cached(file_signature(path), source.id_field)]


def load_records_or_empty(dataset: str, data_dir: Optional[Path] = None) -> List[Record]:
    try:
        return load_records(dataset, data_dir)
    except LoadError as exc:
        logger.warning("Falling back to empty %s dataset: %s", dataset, exc)
        return []
