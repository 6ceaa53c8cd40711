"""
Record parsing logic for case snapshots, turning raw document rows into validated event records with a calendar date and two non-negative metrics, and counting the rows that cannot be aggregated instead of failing the whole snapshot.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from config import settings
from engine.errors import MalformedRecord

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventRecord:
    date: date
    metric_a: float
    metric_b: float
    location: str = ""
    region: str = ""
    record_id: Optional[str] = None

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month


RawRecord = Union[EventRecord, Mapping[str, Any]]


def parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise MalformedRecord(f"date must be a string or date, got {type(value).__name__}")

    text = value.strip()
    if not text:
        raise MalformedRecord("date is empty")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in settings.date_formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise MalformedRecord(f"unparseable date {value!r}")


def parse_metric(value: Any, name: str) -> float:
    """Coerce a count to a finite, non-negative float.

    Fractional values are kept; the two metrics are treated as generic
    numeric fields rather than strictly integral counts.
    """
    # bool is an int subclass; a checkbox value is not a count
    if isinstance(value, bool) or value is None:
        raise MalformedRecord(f"{name} is not numeric: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise MalformedRecord(f"{name} is empty")
    try:
        num = float(value)
    except OverflowError as exc:
        raise MalformedRecord(f"{name} is too large for a float") from exc
    except (TypeError, ValueError) as exc:
        raise MalformedRecord(f"{name} is not numeric: {value!r}") from exc
    if not math.isfinite(num):
        raise MalformedRecord(f"{name} is not finite: {value!r}")
    if num < 0:
        raise MalformedRecord(f"{name} is negative: {value!r}")
    return num


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def parse_record(raw: RawRecord) -> EventRecord:
    if isinstance(raw, EventRecord):
        checked = replace(
            raw,
            date=parse_date(raw.date),
            metric_a=parse_metric(raw.metric_a, settings.metric_a_field),
            metric_b=parse_metric(raw.metric_b, settings.metric_b_field),
        )
        return raw if checked == raw else checked
    if not isinstance(raw, Mapping):
        raise MalformedRecord(f"record must be a mapping, got {type(raw).__name__}")

    if settings.date_field not in raw:
        raise MalformedRecord(f"record has no {settings.date_field!r} field")
    record_id = raw.get(settings.id_field)

    return EventRecord(
        date=parse_date(raw[settings.date_field]),
        metric_a=parse_metric(raw.get(settings.metric_a_field), settings.metric_a_field),
        metric_b=parse_metric(raw.get(settings.metric_b_field), settings.metric_b_field),
        location=_text(raw.get(settings.location_field)),
        region=_text(raw.get(settings.region_field)),
        record_id=None if record_id is None else str(record_id),
    )


def validate_snapshot(raw_records: Iterable[RawRecord]) -> Tuple[List[EventRecord], int]:
    """Parse every row of a snapshot, returning the valid records and the skipped count.

    A malformed row never aborts the snapshot: it is logged at debug level and
    counted, and a single warning summarises the total for the call.
    """
    valid: List[EventRecord] = []
    skipped = 0
    for idx, raw in enumerate(raw_records):
        try:
            valid.append(parse_record(raw))
        except MalformedRecord as exc:
            skipped += 1
            log.debug("skipping record %d: %s", idx, exc)

    if skipped:
        log.warning("skipped %d malformed record(s) of %d", skipped, skipped + len(valid))
    return valid, skipped
