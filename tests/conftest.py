import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from datetime import date

from engine.records import EventRecord


def _raw(day, cases, deaths, location="Manila", regions="NCR", **extra):
    row = {"date": day, "cases": cases, "deaths": deaths, "location": location, "regions": regions}
    row.update(extra)
    return row


@pytest.fixture
def raw():
    """Factory for snapshot rows shaped like the stored case documents."""
    return _raw


@pytest.fixture
def snapshot():
    return [
        _raw("2023-01-05", 3, 1, location="Quezon City"),
        _raw("2023-01-20", 7, 0, location="Cebu", regions="Central Visayas"),
        _raw("2023-04-11", 12, 2, location="Davao", regions="Davao Region"),
        _raw("2023-08-02", 20, 3, location="Manila"),
        _raw("2023-12-30", 5, 1, location="baguio", regions="CAR"),
        _raw("2022-12-15", 9, 4, location="Iloilo", regions="Western Visayas"),
        _raw("2024-02-01", 4, 0, location="Cebu", regions="Central Visayas"),
    ]


@pytest.fixture
def record():
    def _make(day, a, b, location="", region=""):
        return EventRecord(date=date.fromisoformat(day), metric_a=a, metric_b=b, location=location, region=region)

    return _make


# Prevent pytest from attempting to collect any modules inside the engine
# package itself.

def pytest_ignore_collect(collection_path, config):
    if os.path.sep + 'engine' + os.path.sep in str(collection_path):
        return True
