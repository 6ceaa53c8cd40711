"""
Bucketing logic for case records, deriving calendar bucket keys at monthly or yearly granularity, applying the year filter policy, and accumulating metric totals per bucket in chronological key order.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from config import MONTH_ABBREVIATIONS, settings
from engine.enums import Granularity
from engine.errors import InvalidOption
from engine.records import EventRecord


class BucketKey(NamedTuple):
    year: int
    month: Optional[int] = None

    @property
    def label(self) -> str:
        if self.month is None:
            return str(self.year)
        return f"{MONTH_ABBREVIATIONS[self.month - 1]} {self.year}"

    def sort_key(self) -> Tuple[int, int]:
        return (self.year, self.month or 0)


@dataclass
class BucketTotals:
    metric_a: float = 0.0
    metric_b: float = 0.0

    def add(self, record: EventRecord) -> None:
        self.metric_a += record.metric_a
        self.metric_b += record.metric_b


def bucket_key(record: EventRecord, granularity: Granularity) -> BucketKey:
    if granularity is Granularity.monthly:
        return BucketKey(record.year, record.month)
    return BucketKey(record.year)


def parse_year(value: Any) -> Optional[int]:
    # an unselected <select> arrives as the empty string
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidOption(f"year filter must be a year, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidOption(f"year filter must be a 4-digit year, got {value!r}")
        value = int(text)
    if not isinstance(value, Integral):
        raise InvalidOption(f"year filter must be an integer year, got {type(value).__name__}")
    value = int(value)
    if not settings.year_min <= value <= settings.year_max:
        raise InvalidOption(
            f"year filter {value} outside [{settings.year_min}, {settings.year_max}]"
        )
    return value


def effective_year_filter(
    granularity: Union[Granularity, str, None],
    year_filter: Any = None,
) -> Optional[int]:
    """Resolve the year filter that actually applies to a computation.

    The filter is validated first so a bad value fails fast regardless of
    granularity; it is then dropped for yearly granularity, matching the
    selector reset that happens when the basis switches away from monthly.
    """
    gran = Granularity.parse(granularity)
    year = parse_year(year_filter)
    return year if gran.uses_year_filter else None


def aggregate(
    records: Iterable[EventRecord],
    granularity: Granularity,
    year_filter: Optional[int] = None,
) -> List[Tuple[BucketKey, BucketTotals]]:
    buckets: Dict[BucketKey, BucketTotals] = {}
    for record in records:
        if year_filter is not None and record.year != year_filter:
            continue
        key = bucket_key(record, granularity)
        totals = buckets.get(key)
        if totals is None:
            totals = buckets[key] = BucketTotals()
        totals.add(record)

    return sorted(buckets.items(), key=lambda item: item[0].sort_key())
