from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from insights.config import Settings
from insights.dashboards import DASHBOARDS, compute
from insights.data import LoadError, get_source, load_records_or_empty, read_records
from insights.filters import normalize_filters

logger = logging.getLogger(__name__)


def _parse_selected(pairs: Sequence[str]) -> Dict[str, List[str]]:
    selected: Dict[str, List[str]] = {}
    for pair in pairs:
        field, sep, value = pair.partition("=")
        if not sep or not field.strip():
            raise argparse.ArgumentTypeError(f"Expected FIELD=VALUE, got '{pair}'")
        selected.setdefault(field.strip(), []).append(value)
    return selected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="insights", description="Print a dashboard payload as JSON.")
    parser.add_argument("dataset", choices=sorted(DASHBOARDS))
    parser.add_argument("--csv", type=Path, default=None, help="Read this CSV instead of the configured data dir.")
    parser.add_argument("--top-n", type=int, default=None, help="Length of the risk list.")
    parser.add_argument("--filter", dest="filters", action="append", default=[], metavar="FIELD=VALUE")
    parser.add_argument("--query", default="", help="Substring match on the record id.")
    parser.add_argument("--charts", action="store_true", help="Include Vega-Lite chart specs.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        selected = _parse_selected(args.filters)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    if args.csv is not None:
        try:
            records = read_records(args.csv, get_source(args.dataset).id_field)
        except LoadError as exc:
            logger.warning("Falling back to empty %s dataset: %s", args.dataset, exc)
            records = []
    else:
        records = load_records_or_empty(args.dataset, settings.data_dir)

    top_n = args.top_n if args.top_n is not None else settings.risk_limit
    filters = normalize_filters(
        {"selected": selected, "top_n": top_n, "query": args.query},
        default_top_n=settings.risk_limit,
    )
    payload = compute(args.dataset, records, filters, jitter=settings.risk_jitter, with_charts=args.charts)
    json.dump(payload, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
