"""Command-line entry point: build reports from a JSON ledger export

The export is a single JSON object with optional ``accounts``,
``transactions``, ``incomes`` and ``recurringExpenses`` arrays, as produced
by the CRUD layer. ``recurring_expenses`` is accepted in place of
``recurringExpenses``.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from household_ledger.config import settings
from household_ledger.domain.exceptions import DomainException
from household_ledger.ingest.schemas import (
    parse_accounts,
    parse_incomes,
    parse_recurring_expenses,
    parse_transactions,
)
from household_ledger.infrastructure.observability.logging import setup_logging
from household_ledger.services.reports import (
    build_forecast_report,
    build_payment_report,
    build_period_report,
    build_untracked_report,
)
from household_ledger.utils.date_utils import month_range, parse_month_year_key


def _month_arg(value: str) -> tuple:
    parsed = parse_month_year_key(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="household-ledger", description=__doc__.splitlines()[0])
    parser.add_argument("export", type=Path, help="JSON ledger export")
    parser.add_argument("--household", required=True, help="Household identifier")

    sub = parser.add_subparsers(dest="report", required=True)

    summary = sub.add_parser("summary", help="Money-routing summary for a month")
    summary.add_argument("--month", type=_month_arg, required=True, help="YYYY-MM")

    forecast = sub.add_parser("forecast", help="Recurring budget vs credit card spending")
    forecast.add_argument("--month", type=_month_arg, required=True, help="YYYY-MM")
    forecast.add_argument("--tolerance", type=float, default=None, help="Fraction, e.g. 0.15")

    untracked = sub.add_parser("untracked", help="Spent-but-not-listed for credit cards")
    untracked.add_argument("--month", type=_month_arg, required=True, help="YYYY-MM")
    untracked.add_argument("--account", default=None, help="Limit to one account id")

    payments = sub.add_parser("payments", help="Debt payments over a range of months")
    payments.add_argument("--from", dest="start", type=_month_arg, required=True, help="YYYY-MM")
    payments.add_argument("--to", dest="end", type=_month_arg, required=True, help="YYYY-MM")

    return parser


def load_export(path: Path) -> Dict[str, List[dict]]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError("ledger export must be a JSON object")
    return data


def run(args: argparse.Namespace) -> Dict[str, Any]:
    data = load_export(args.export)
    accounts = parse_accounts(data.get("accounts", []))
    transactions = parse_transactions(data.get("transactions", []))

    if args.report == "summary":
        incomes = parse_incomes(data.get("incomes", []))
        return build_period_report(args.household, *args.month, transactions, incomes).to_dict()

    if args.report == "forecast":
        recurring = parse_recurring_expenses(data.get("recurringExpenses", data.get("recurring_expenses", [])))
        result = build_forecast_report(
            args.household, *args.month, recurring, transactions,
            accounts=accounts or None, tolerance=args.tolerance,
        )
        return result.to_dict()

    if args.report == "untracked":
        return build_untracked_report(
            args.household, *args.month, accounts, transactions, account_id=args.account
        ).to_dict()

    start = month_range(*args.start).start
    end = month_range(*args.end).end
    return build_payment_report(args.household, start, end, transactions, accounts).to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    # Reports go to stdout, so logs go to stderr
    setup_logging(settings.log_level, stream=sys.stderr)
    args = build_parser().parse_args(argv)

    try:
        report = run(args)
    except (DomainException, OSError, ValueError) as e:
        logging.error(f"Report failed: {e}", extra={"household_id": args.household})
        return 1

    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0
