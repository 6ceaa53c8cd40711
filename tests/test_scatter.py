"""
Test cases for scatter points and the least squares trendline, including degenerate fits and the point count per bucket.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from api.responses import ScatterPoint, TrendlinePoint
from engine.bucketing import BucketKey
from engine.records import validate_snapshot
from engine.scatter import build_scatter, fit_trendline, linear_fit, r_squared


def test_linear_fit_and_r2():
    xs = [0, 1, 2, 3, 4]
    ys = [1, 3, 5, 7, 9]
    slope, intercept = linear_fit(xs, ys)
    assert slope == pytest.approx(2.0)
    assert intercept == pytest.approx(1.0)
    assert r_squared(xs, ys, slope, intercept) == pytest.approx(1.0)


def test_r2_zero_for_flat_y():
    assert r_squared([1, 2, 3], [4, 4, 4], 0.0, 4.0) == 0.0


def test_trendline_two_points():
    line = fit_trendline([{"x": 0, "y": 0}, {"x": 2, "y": 4}])
    assert line == [TrendlinePoint(x=0, y=0), TrendlinePoint(x=2, y=4)]
    assert linear_fit([0, 2], [0, 4]) == (2.0, 0.0)


@pytest.mark.parametrize("points", [
    [],
    [{"x": 5, "y": 9}],
    [(3, 1), (3, 7), (3, 2)],
])
def test_trendline_degenerate_is_empty(points):
    assert fit_trendline(points) == []


def test_linear_fit_degenerate_is_none():
    assert linear_fit([], []) is None
    assert linear_fit([5], [9]) is None
    assert linear_fit([0.1, 0.1, 0.1], [1, 2, 3]) is None


def test_trendline_spans_x_range_in_any_order():
    pts = [ScatterPoint(x=10, y=2, label="b"), ScatterPoint(x=2, y=1, label="a"), ScatterPoint(x=6, y=2, label="c")]
    line = fit_trendline(pts)
    assert [p.x for p in line] == [2.0, 10.0]
    slope, intercept = linear_fit([10, 2, 6], [2, 1, 2])
    assert line[0].y == pytest.approx(slope * 2 + intercept)
    assert line[1].y == pytest.approx(slope * 10 + intercept)


def test_trendline_is_not_rounded():
    line = fit_trendline([(0, 0), (1, 1), (2, 1)])
    # slope 0.5, intercept 1/6
    assert line[0].y == pytest.approx(1 / 6)
    assert line[1].y == pytest.approx(1 + 1 / 6)


def test_scatter_points_per_bucket(snapshot):
    report = build_scatter(snapshot, "monthly")
    valid, _ = validate_snapshot(snapshot)
    keys = {BucketKey(r.year, r.month) for r in valid}
    assert len(report.points) == len(keys)
    assert [p.label for p in report.points] == ["Dec 2022", "Jan 2023", "Apr 2023", "Aug 2023", "Dec 2023", "Feb 2024"]
    assert report.points[1] == ScatterPoint(x=10, y=1, label="Jan 2023")


def test_scatter_point_count_with_year_filter(snapshot):
    report = build_scatter(snapshot, "monthly", year_filter=2023)
    assert len(report.points) == 4
    assert report.year_filter == 2023


def test_scatter_reports_fit(snapshot):
    report = build_scatter(snapshot, "yearly")
    xs = [p.x for p in report.points]
    ys = [p.y for p in report.points]
    slope, intercept = linear_fit(xs, ys)
    assert report.slope == pytest.approx(slope)
    assert report.intercept == pytest.approx(intercept)
    assert 0.0 <= report.r_squared <= 1.0
    assert report.trendline == fit_trendline(report.points)
    assert report.title == "Relationship Between Cases and Deaths (Yearly)"


def test_scatter_single_bucket_has_no_trendline(raw):
    report = build_scatter([raw("2023-01-05", 3, 1), raw("2023-01-09", 4, 1)], "monthly")
    assert len(report.points) == 1
    assert report.trendline == []
    assert report.slope is None and report.intercept is None and report.r_squared is None


def test_scatter_skips_and_ignores_year_for_yearly(snapshot, raw):
    rows = snapshot + [raw("bad", 1, 1)]
    ignored = build_scatter(rows, "yearly", year_filter=2023)
    cleared = build_scatter(rows, "yearly")
    assert ignored == cleared
    assert ignored.skipped == 1
