"""
Dashboard summary logic that recomputes every chart payload from a single record snapshot, so the caller can re-run it from scratch whenever the upstream store pushes a new snapshot.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from api.requests import AggregationOptions
from api.responses import DashboardReport
from engine.listing import available_years
from engine.records import RawRecord, validate_snapshot
from engine.scatter import scatter_from_records
from engine.series import series_from_records

log = logging.getLogger(__name__)


def summarize(
    records: Iterable[RawRecord],
    options: Optional[AggregationOptions] = None,
    scatter_options: Optional[AggregationOptions] = None,
) -> DashboardReport:
    """Build the bar series, scatter report and year list for one snapshot.

    The bar and scatter charts keep independent selectors; when
    ``scatter_options`` is omitted the scatter chart follows ``options``.
    The snapshot is validated once and shared by both charts.
    """
    if options is None:
        options = AggregationOptions()
    if scatter_options is None:
        scatter_options = options

    valid, skipped = validate_snapshot(records)
    series = series_from_records(valid, options.granularity, options.effective_year_filter, skipped)
    scatter = scatter_from_records(
        valid, scatter_options.granularity, scatter_options.effective_year_filter, skipped
    )

    log.debug(
        "summarized %d record(s): %d bar bucket(s), %d scatter point(s)",
        len(valid), len(series.buckets), len(scatter.points),
    )
    return DashboardReport(
        series=series,
        scatter=scatter,
        years=available_years(valid),
        record_count=len(valid),
        skipped=skipped,
    )
