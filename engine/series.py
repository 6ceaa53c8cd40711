"""
Series building logic for bar-style charts, aggregating a case snapshot into chronologically ordered monthly or yearly totals of both metrics, with the applied year filter, chart title and skipped-record count reported alongside.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Union

from api.responses import SeriesBucket, SeriesReport
from config import settings
from engine.bucketing import aggregate, effective_year_filter
from engine.enums import Granularity
from engine.records import EventRecord, RawRecord, validate_snapshot


def series_title(granularity: Granularity, year_filter: Optional[int] = None) -> str:
    metrics = f"{settings.metric_a_label} and {settings.metric_b_label}"
    if granularity is Granularity.monthly and year_filter is not None:
        return f"Total {metrics} for {year_filter}"
    return f"Total {metrics} ({granularity.title()})"


def series_from_records(
    records: List[EventRecord],
    granularity: Granularity,
    year_filter: Optional[int],
    skipped: int = 0,
) -> SeriesReport:
    buckets = [
        SeriesBucket(
            label=key.label,
            year=key.year,
            month=key.month,
            metric_a=totals.metric_a,
            metric_b=totals.metric_b,
        )
        for key, totals in aggregate(records, granularity, year_filter)
    ]
    return SeriesReport(
        granularity=granularity,
        year_filter=year_filter,
        title=series_title(granularity, year_filter),
        buckets=buckets,
        skipped=skipped,
    )


def build_series(
    records: Iterable[RawRecord],
    granularity: Union[Granularity, str, None] = Granularity.monthly,
    year_filter: Any = None,
) -> SeriesReport:
    gran = Granularity.parse(granularity)
    year = effective_year_filter(gran, year_filter)
    valid, skipped = validate_snapshot(records)
    return series_from_records(valid, gran, year, skipped)
