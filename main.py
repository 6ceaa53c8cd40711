"""
Entry point for the CaseTrend dashboard report.

Reads a JSON snapshot of case records and prints the bar series, scatter
points, trendline and year list that the dashboard renders.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from api.requests import AggregationOptions
from config import settings
from engine.dashboard import summarize

log = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate a case snapshot into chart data")
    parser.add_argument("snapshot", help="JSON file with a list of records, or '-' for stdin")
    parser.add_argument("--granularity", default=None, help="monthly or yearly (bar chart)")
    parser.add_argument("--year", default=None, help="Year filter for the monthly bar chart")
    parser.add_argument(
        "--scatter-granularity",
        default=None,
        help="monthly or yearly (scatter chart, defaults to --granularity)",
    )
    parser.add_argument("--scatter-year", default=None, help="Year filter for the monthly scatter chart")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent for the printed report")
    return parser.parse_args(argv)


def load_snapshot(path: str) -> List[Any]:
    if path == "-":
        payload = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    if isinstance(payload, dict):
        payload = payload.get("records", [])
    if not isinstance(payload, list):
        raise ValueError(f"snapshot must be a list of records, got {type(payload).__name__}")
    return payload


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    try:
        options = AggregationOptions(granularity=args.granularity, year_filter=args.year)
        scatter_options = AggregationOptions(
            granularity=args.scatter_granularity or options.granularity,
            year_filter=args.scatter_year,
        )
    except ValidationError as exc:
        log.error("invalid options: %s", exc)
        return 2

    try:
        records = load_snapshot(args.snapshot)
    except (OSError, ValueError) as exc:
        log.error("cannot load snapshot %s: %s", args.snapshot, exc)
        return 1

    report = summarize(records, options, scatter_options)
    print(json.dumps(report.model_dump(mode="json"), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
