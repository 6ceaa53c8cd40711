"""
Response models for aggregation results and record listings.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import datetime as dt
from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.enums import Granularity


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class SeriesBucket(NpModel):

    label: str
    year: int
    month: Optional[int] = None
    metric_a: float
    metric_b: float


class SeriesReport(NpModel):

    granularity: Granularity
    year_filter: Optional[int] = None
    title: str
    buckets: List[SeriesBucket] = Field(default_factory=list)
    skipped: int = 0

    @property
    def labels(self) -> List[str]:
        return [b.label for b in self.buckets]


class ScatterPoint(NpModel):

    x: float
    y: float
    label: str


class TrendlinePoint(NpModel):

    x: float
    y: float


class ScatterReport(NpModel):

    granularity: Granularity
    year_filter: Optional[int] = None
    title: str
    points: List[ScatterPoint] = Field(default_factory=list)
    trendline: List[TrendlinePoint] = Field(default_factory=list)
    slope: Optional[float] = None
    intercept: Optional[float] = None
    r_squared: Optional[float] = None
    skipped: int = 0


class RecordRow(NpModel):

    record_id: Optional[str] = None
    location: str
    region: str
    date: dt.date
    metric_a: float
    metric_b: float


class RecordPage(NpModel):

    items: List[RecordRow] = Field(default_factory=list)
    page: int
    page_size: int
    total_items: int
    total_pages: int
    first_row_number: int
    skipped: int = 0


class DashboardReport(NpModel):

    series: SeriesReport
    scatter: ScatterReport
    years: List[int] = Field(default_factory=list)
    record_count: int = 0
    skipped: int = 0
