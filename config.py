"""
Constants and configuration for CaseTrend.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List

from pydantic_settings import BaseSettings


GRANULARITY_MONTHLY = "monthly"
GRANULARITY_YEARLY = "yearly"

CASETREND_DEFAULT_GRANULARITY = os.getenv("CASETREND_DEFAULT_GRANULARITY", GRANULARITY_MONTHLY).lower()
CASETREND_PAGE_SIZE = int(os.getenv("CASETREND_PAGE_SIZE", "10"))
CASETREND_LOG_LEVEL = os.getenv("CASETREND_LOG_LEVEL", "INFO").upper()

# english abbreviations, independent of the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class Settings(BaseSettings):
    # snapshot field names as stored in the case collection
    date_field: str = "date"
    metric_a_field: str = "cases"
    metric_b_field: str = "deaths"
    location_field: str = "location"
    region_field: str = "regions"
    id_field: str = "id"

    # display names used when building chart titles
    metric_a_label: str = "Cases"
    metric_b_label: str = "Deaths"

    # tried after ISO parsing fails
    date_formats: List[str] = ["%Y/%m/%d", "%m/%d/%Y"]

    default_granularity: str = CASETREND_DEFAULT_GRANULARITY

    # a year filter must be a 4-digit year
    year_min: int = 1000
    year_max: int = 9999

    page_size: int = CASETREND_PAGE_SIZE

    log_level: str = CASETREND_LOG_LEVEL

    model_config = {
        "env_prefix": "CASETREND_",
        "extra": "ignore",
    }


settings = Settings()
