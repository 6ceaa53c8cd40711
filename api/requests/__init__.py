from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from config import settings
from engine.bucketing import effective_year_filter, parse_year
from engine.enums import Granularity


class AggregationOptions(BaseModel):
    granularity: Granularity = Field(default_factory=lambda: Granularity.parse(None))
    year_filter: Optional[int] = None

    @field_validator("granularity", mode="before")
    @classmethod
    def _granularity(cls, value):
        return Granularity.parse(value)

    @field_validator("year_filter", mode="before")
    @classmethod
    def _year(cls, value):
        return parse_year(value)

    @property
    def effective_year_filter(self) -> Optional[int]:
        return effective_year_filter(self.granularity, self.year_filter)


class RecordQuery(BaseModel):
    search: str = ""
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default_factory=lambda: settings.page_size, ge=1, le=1000)
