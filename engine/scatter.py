"""
Scatter and trendline logic relating the two case metrics, emitting one point per calendar bucket and fitting an ordinary least squares line over those points, reported as its two endpoints across the observed x range or as no line at all when the fit is degenerate.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from api.responses import ScatterPoint, ScatterReport, TrendlinePoint
from config import settings
from engine.bucketing import aggregate, effective_year_filter
from engine.enums import Granularity
from engine.records import EventRecord, RawRecord, validate_snapshot

PointLike = Union[ScatterPoint, TrendlinePoint, Mapping[str, Any], Tuple[float, float]]


def _xy(point: PointLike) -> Tuple[float, float]:
    if isinstance(point, (ScatterPoint, TrendlinePoint)):
        return point.x, point.y
    if isinstance(point, Mapping):
        return float(point["x"]), float(point["y"])
    x, y = point
    return float(x), float(y)


def linear_fit(xs: Sequence[float], ys: Sequence[float]) -> Optional[Tuple[float, float]]:
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    n = len(x)
    if n == 0 or n != len(y):
        return None
    # all-equal x has no defined slope even if rounding leaves a tiny denominator
    if np.ptp(x) == 0:
        return None

    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2 = float(np.sum(x * x))

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def r_squared(xs: Sequence[float], ys: Sequence[float], slope: float, intercept: float) -> float:
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    predicted = slope * x + intercept
    ss_res = np.sum((y - predicted) ** 2)
    ss_tot = np.sum((y - np.mean(y)) ** 2)
    return float(1.0 - ss_res / ss_tot) if ss_tot > 0 else 0.0


def fit_trendline(points: Iterable[PointLike]) -> List[TrendlinePoint]:
    pairs = [_xy(p) for p in points]
    if not pairs:
        return []
    xs = [x for x, _ in pairs]
    ys = [y for _, y in pairs]
    fit = linear_fit(xs, ys)
    if fit is None:
        return []

    slope, intercept = fit
    min_x, max_x = min(xs), max(xs)
    return [
        TrendlinePoint(x=min_x, y=slope * min_x + intercept),
        TrendlinePoint(x=max_x, y=slope * max_x + intercept),
    ]


def scatter_title(granularity: Granularity) -> str:
    return (
        f"Relationship Between {settings.metric_a_label} and {settings.metric_b_label} "
        f"({granularity.title()})"
    )


def scatter_from_records(
    records: List[EventRecord],
    granularity: Granularity,
    year_filter: Optional[int],
    skipped: int = 0,
) -> ScatterReport:
    points = [
        ScatterPoint(x=totals.metric_a, y=totals.metric_b, label=key.label)
        for key, totals in aggregate(records, granularity, year_filter)
    ]
    xs = [p.x for p in points]
    ys = [p.y for p in points]

    fit = linear_fit(xs, ys)
    slope = intercept = r2 = None
    if fit is not None:
        slope, intercept = fit
        r2 = r_squared(xs, ys, slope, intercept)

    return ScatterReport(
        granularity=granularity,
        year_filter=year_filter,
        title=scatter_title(granularity),
        points=points,
        trendline=fit_trendline(points),
        slope=slope,
        intercept=intercept,
        r_squared=r2,
        skipped=skipped,
    )


def build_scatter(
    records: Iterable[RawRecord],
    granularity: Union[Granularity, str, None] = Granularity.monthly,
    year_filter: Any = None,
) -> ScatterReport:
    gran = Granularity.parse(granularity)
    year = effective_year_filter(gran, year_filter)
    valid, skipped = validate_snapshot(records)
    return scatter_from_records(valid, gran, year, skipped)
