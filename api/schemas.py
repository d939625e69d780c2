from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class DashboardFiltersModel(BaseModel):
    selected: Dict[str, List[str]] = Field(default_factory=dict)
    top_n: Optional[int] = None
    query: str = ""


class DatasetInfo(BaseModel):
    name: str
    filename: str
    id_field: str


class MetaDatasetsResponse(BaseModel):
    datasets: List[DatasetInfo]


class MetaListResponse(BaseModel):
    values: List[str]
