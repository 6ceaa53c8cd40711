"""
Enumerations for time granularity used when bucketing case records.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from engine.errors import InvalidOption


class Granularity(str, Enum):
    monthly = "monthly"
    yearly = "yearly"

    @classmethod
    def parse(cls, value: Union[Granularity, str, None]) -> Granularity:
        # None falls back to the configured default so callers can pass
        # an unset selector straight through.
        if value is None:
            from config import settings

            value = settings.default_granularity
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(g.value for g in cls)
        raise InvalidOption(f"unrecognized granularity {value!r} (expected one of: {allowed})")

    @property
    def uses_year_filter(self) -> bool:
        return self is Granularity.monthly

    def title(self) -> str:
        return self.value.capitalize()
