"""
Listing logic for the record table, covering the distinct years offered by the year selector, case-insensitive search over location and region, location ordering and 1-based pagination.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

from api.requests import RecordQuery
from api.responses import RecordPage, RecordRow
from config import settings
from engine.errors import InvalidOption
from engine.records import EventRecord, RawRecord, validate_snapshot


def available_years(records: Iterable[EventRecord]) -> List[int]:
    return sorted({r.year for r in records})


def search_records(records: Iterable[EventRecord], term: Optional[str] = None) -> List[EventRecord]:
    needle = (term or "").strip().casefold()
    matched = [
        r for r in records
        if not needle or needle in r.location.casefold() or needle in r.region.casefold()
    ]
    # sorted() is stable, so equal locations keep snapshot order
    return sorted(matched, key=lambda r: r.location.casefold())


def _row(record: EventRecord) -> RecordRow:
    return RecordRow(
        record_id=record.record_id,
        location=record.location,
        region=record.region,
        date=record.date,
        metric_a=record.metric_a,
        metric_b=record.metric_b,
    )


def paginate(
    records: List[EventRecord],
    page: int = 1,
    page_size: Optional[int] = None,
    skipped: int = 0,
) -> RecordPage:
    if page_size is None:
        page_size = settings.page_size
    if page < 1:
        raise InvalidOption(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise InvalidOption(f"page size must be >= 1, got {page_size}")

    total = len(records)
    start = (page - 1) * page_size
    return RecordPage(
        items=[_row(r) for r in records[start:start + page_size]],
        page=page,
        page_size=page_size,
        total_items=total,
        total_pages=math.ceil(total / page_size),
        first_row_number=start + 1,
        skipped=skipped,
    )


def list_records(records: Iterable[RawRecord], query: Optional[RecordQuery] = None) -> RecordPage:
    if query is None:
        query = RecordQuery()
    valid, skipped = validate_snapshot(records)
    matched = search_records(valid, query.search)
    return paginate(matched, query.page, query.page_size, skipped=skipped)
