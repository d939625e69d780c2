from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from insights.records import Record, get_category, get_id


@dataclass(frozen=True)
class DashboardFilters:
    selected: Dict[str, List[str]] = field(default_factory=dict)
    top_n: int = 10
    query: str = ""


def _as_str_list(values: Optional[Iterable[object]]) -> List[str]:
    if not values:
        return []
    if isinstance(values, (str, bytes)):
        values = [values]
    out: List[str] = []
    for v in values:
        if v is None:
            continue
        s = str(v).strip()
        if s:
            out.append(s)
    return out


def normalize_filters(
    raw: dict,
    *,
    available_fields: Optional[Sequence[str]] = None,
    default_top_n: int = 10,
) -> DashboardFilters:
    raw = raw or {}
    allowed = set(available_fields) if available_fields is not None else None

    selected: Dict[str, List[str]] = {}
    raw_selected = raw.get("selected") or {}
    if isinstance(raw_selected, dict):
        for name, values in raw_selected.items():
            name = str(name).strip()
            if not name or (allowed is not None and name not in allowed):
                continue
            cleaned = _as_str_list(values)
            if cleaned:
                selected[name] = cleaned

    top_n = raw.get("top_n")
    if top_n is None:
        top_n = default_top_n
    try:
        top_n = int(top_n)
    except (TypeError, ValueError):
        top_n = default_top_n
    top_n = max(1, min(200, top_n))

    query = str(raw.get("query") or "").strip()
    return DashboardFilters(selected=selected, top_n=top_n, query=query)


def apply_filters(records: Iterable[Record], filters: DashboardFilters, *, id_field: Optional[str] = None) -> List[Record]:
    selected = {name: set(values) for name, values in filters.selected.items()}
    query = filters.query.lower()
    out: List[Record] = []
    for record in records:
        if any(get_category(record, name) not in values for name, values in selected.items()):
            continue
        if query:
            record_id = get_id(record, id_field) or ""
            if query not in record_id.lower():
                continue
        out.append(record)
    return out
