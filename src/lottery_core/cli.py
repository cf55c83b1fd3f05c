"""Print the sales dashboard (CLI).

Usage
-----
From a saved sales report response:
    lottery-dashboard --input report.json

Fetching from the API (LOTTERY_API_BASE / LOTTERY_API_TOKEN):
    lottery-dashboard --recent 5

Deterministic labels and JSON output:
    lottery-dashboard --input report.json --now 2025-01-15T18:00:00 --json

Exit codes:
    0 on success
    1 when the API rejects the session token
    2 on argument, input or fetch errors
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Sequence

from lottery_core.config import DEFAULT_RECENT_COUNT, ReportConfig
from lottery_core.exceptions import LotteryCoreError, UnauthenticatedError
from lottery_core.formatters.console import format_dashboard_for_console
from lottery_core.reporting.client import ReportClient
from lottery_core.sales.api import DashboardView, build_dashboard_from_payload

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lottery-dashboard",
        description="Summarize lottery sales into totals, recent purchases and a daily trend.",
    )
    p.add_argument(
        "-i", "--input",
        default=None,
        help="Sales report JSON file. If omitted, the report is fetched from LOTTERY_API_BASE.",
    )
    p.add_argument(
        "--now",
        default=None,
        help="Reference time for Today/Yesterday labels (ISO format). Defaults to now.",
    )
    p.add_argument(
        "--recent",
        type=int,
        default=DEFAULT_RECENT_COUNT,
        help=f"Number of recent transactions to show (default: {DEFAULT_RECENT_COUNT}).",
    )
    p.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print the dashboard as JSON instead of text.",
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Less logging output.",
    )
    p.add_argument(
        "--verbose", "--debug",
        action="store_true",
        dest="verbose",
        help="Verbose/debug logging output.",
    )
    return p


def _load_view(args: argparse.Namespace, reference_now: datetime | None) -> DashboardView:
    if args.input:
        payload = json.loads(Path(args.input).read_text(encoding="utf-8"))
        return build_dashboard_from_payload(
            payload, reference_now=reference_now, recent_count=args.recent
        )

    config = ReportConfig.from_env()
    config.recent_count = args.recent
    client = ReportClient(config, token=os.environ.get("LOTTERY_API_TOKEN"))
    return client.fetch_dashboard(reference_now=reference_now)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    reference_now = None
    if args.now:
        try:
            reference_now = datetime.fromisoformat(args.now)
        except ValueError:
            print(f"ERROR: --now is not an ISO timestamp: {args.now!r}", file=sys.stderr)
            return 2

    if args.recent < 0:
        print("ERROR: --recent must be >= 0", file=sys.stderr)
        return 2

    try:
        view = _load_view(args, reference_now)
    except UnauthenticatedError as e:
        logger.error("Session rejected: %s", e)
        print("ERROR: not authenticated, log in again and refresh LOTTERY_API_TOKEN", file=sys.stderr)
        return 1
    except (LotteryCoreError, OSError, json.JSONDecodeError) as e:
        logger.error(f"Error: {e}", exc_info=args.verbose)
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.as_json:
        print(json.dumps(view.to_dict(), indent=2, default=str))
    else:
        print(format_dashboard_for_console(view))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
