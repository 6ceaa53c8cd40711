"""
Test cases for the Granularity enumeration, validating parsing and the year filter policy.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import Granularity
from engine.errors import AggregationError, InvalidOption


def test_granularity_values():
    assert list(Granularity) == [Granularity.monthly, Granularity.yearly]
    assert Granularity.monthly.title() == "Monthly"


def test_granularity_parse():
    assert Granularity.parse("yearly") is Granularity.yearly
    assert Granularity.parse(" MONTHLY ") is Granularity.monthly
    assert Granularity.parse(Granularity.yearly) is Granularity.yearly


@pytest.mark.parametrize("value", ["weekly", "", 1, object()])
def test_granularity_parse_rejects(value):
    with pytest.raises(InvalidOption) as exc:
        Granularity.parse(value)
    assert isinstance(exc.value, ValueError)
    assert isinstance(exc.value, AggregationError)


def test_year_filter_policy():
    assert Granularity.monthly.uses_year_filter
    assert not Granularity.yearly.uses_year_filter
