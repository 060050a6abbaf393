"""cospend list: show a project's bills with optional filters."""

import argparse

from cospend.cli.common import fetch_project, get_client, require_project, user_locale
from cospend.cli.output import (
    bills_to_frame,
    render_bills_csv,
    render_bills_json,
    render_bills_table,
    sort_and_limit,
)
from cospend.common.amount_format import AmountFormatter
from cospend.common.bill_filters import FilterOptions, apply_filters
from cospend.common.cospend_client import CospendAPIError
from cospend.common.utils import LOG
from cospend.constants.cospend import OutputFormat

EPILOG = """
Examples:
  cospend list -p myproject
  cospend list -p myproject -b alice
  cospend list -p myproject -c groceries
  cospend list -p myproject --amount ">50"
  cospend list -p myproject --amount "<=100" -n dinner
  cospend list -p myproject --today
  cospend list -p myproject --date ">=2026-01-01"
  cospend list -p myproject --date "<=01-15"
  cospend list -p myproject --this-month
  cospend list -p myproject --this-week
  cospend list -p myproject --recent 7d
  cospend list -p myproject --recent 2w
"""


def register(subparsers, parents) -> None:
    parser = subparsers.add_parser(
        "list",
        aliases=["ls"],
        parents=parents,
        help="List expenses in a Cospend project",
        description="List expenses in a Cospend project with optional filters.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("-b", "--by", dest="paid_by", help="Filter by paying member username")
    parser.add_argument(
        "-f",
        "--for",
        dest="paid_for",
        action="append",
        default=[],
        help="Filter by owed member username (repeatable)",
    )
    parser.add_argument("-a", "--amount", help="Filter by amount (e.g., 50, >30, <=100, =25)")
    parser.add_argument("-n", "--name", help="Filter by name (case-insensitive, contains)")
    parser.add_argument("-m", "--method", help="Filter by payment method")
    parser.add_argument("-c", "--category", help="Filter by category")
    parser.add_argument(
        "-l", "--limit", type=int, default=0, help="Limit number of results (0 = no limit)"
    )
    parser.add_argument("--date", help="Filter by date (e.g., 2026-01-15, >=2026-01-01, <=01-15)")
    parser.add_argument("--today", action="store_true", help="Filter bills from today")
    parser.add_argument("--this-month", action="store_true", help="Filter bills from the current month")
    parser.add_argument(
        "--this-week", action="store_true", help="Filter bills from the current calendar week"
    )
    parser.add_argument("--recent", help="Filter recent bills (e.g., 7d, 2w, 1m)")
    parser.add_argument(
        "--format", default=OutputFormat.TABLE.value, help="Output format: table, csv, json"
    )
    parser.set_defaults(func=run)


def filter_options_from_args(args: argparse.Namespace) -> FilterOptions:
    return FilterOptions(
        paid_by=args.paid_by,
        paid_for=list(args.paid_for or []),
        amount=args.amount,
        name=args.name,
        payment_method=args.method,
        category=args.category,
        date_expr=args.date,
        today=args.today,
        this_month=args.this_month,
        this_week=args.this_week,
        recent=args.recent,
    )


def run(args: argparse.Namespace) -> None:
    project_id = require_project(args)

    try:
        output_format = OutputFormat(args.format)
    except ValueError:
        raise ValueError(f"unsupported format: {args.format} (expected table, csv, or json)") from None

    # Bad filter expressions fail here, before the config or network is touched
    parsed = filter_options_from_args(args).parse()

    client = get_client()
    project = fetch_project(client, project_id)
    filters = parsed.build(project)

    try:
        bills = client.get_bills(project_id)
    except CospendAPIError as e:
        raise CospendAPIError(f"fetching bills: {e}") from e
    LOG.debug(f"Fetched {len(bills)} bills, {len(filters)} filter(s) active")

    df = sort_and_limit(bills_to_frame(project, apply_filters(bills, filters)), args.limit)

    if output_format == OutputFormat.CSV:
        print(render_bills_csv(df), end="")
    elif output_format == OutputFormat.JSON:
        print(render_bills_json(df))
    else:
        formatter = AmountFormatter(project.currency_name, user_locale(client))
        print(render_bills_table(df, formatter))
