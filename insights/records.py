"""Typed access over loosely-typed dataset rows.

Rows come straight out of CSV extracts, so any field can be a number, a string,
NaN or absent. Every read in the package goes through these helpers:

- numeric reads fall back to ``0.0`` (blank, non-numeric, NaN, inf)
- categorical reads fall back to ``"Unknown"`` (absent, blank, falsy)
- flag reads compare the trimmed text against an expected token
- slash dates read month-first (``5/8/2022`` is May 8), falling back to
  day-first only when the month-first reading is impossible
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional

import pandas as pd

Record = Mapping[str, Any]

UNKNOWN = "Unknown"

_NA_TOKENS = {"nan", "none", "null", "<na>", "na", "n/a"}

_DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%d-%m-%Y",
]


def is_missing(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def coerce_number(value: object) -> float:
    if isinstance(value, bool):
        return float(value)
    if is_missing(value):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(out) or math.isinf(out):
        return 0.0
    return out


def coerce_label(value: object) -> str:
    # Falsy values (0, False, "") read as missing, matching how the source data is keyed.
    if is_missing(value) or not value:
        return UNKNOWN
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    s = str(value).strip()
    if not s or s.lower() in _NA_TOKENS:
        return UNKNOWN
    return s


def get_number(record: Record, field: str) -> float:
    return coerce_number(record.get(field))


def get_category(record: Record, field: str) -> str:
    return coerce_label(record.get(field))


def get_flag(record: Record, field: str, expected: str = "Yes") -> bool:
    value = record.get(field)
    if is_missing(value):
        return False
    return str(value).strip() == expected


def parse_date(value: object) -> Optional[date]:
    if is_missing(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def get_month_key(record: Record, field: str) -> str:
    """Return ``"YYYY-MM"`` for a parseable date field, else ``"Unknown"``."""
    parsed = parse_date(record.get(field))
    if parsed is None:
        return UNKNOWN
    return f"{parsed.year:04d}-{parsed.month:02d}"


def get_id(record: Record, field: Optional[str]) -> Optional[str]:
    if not field:
        return None
    label = coerce_label(record.get(field))
    return None if label == UNKNOWN else label


# Factories used by dashboard configuration.
def category_of(field: str) -> Callable[[Record], str]:
    return lambda record: get_category(record, field)


def number_of(field: str) -> Callable[[Record], float]:
    return lambda record: get_number(record, field)


def flag_of(field: str, expected: str = "Yes") -> Callable[[Record], bool]:
    return lambda record: get_flag(record, field, expected)


def month_of(field: str) -> Callable[[Record], str]:
    return lambda record: get_month_key(record, field)
