"""cospend add: create an expense in a project."""

import argparse
from datetime import date

from cospend.cli.common import fetch_project, get_client, require_project
from cospend.common.cospend_client import CospendAPIError
from cospend.common.resolver import (
    ResolutionError,
    resolve_category,
    resolve_currency,
    resolve_member,
    resolve_payment_mode,
)
from cospend.common.utils import LOG
from cospend.models import NewBill

EPILOG = """
Examples:
  cospend add "Groceries" 25.50 -p myproject
  cospend add "Dinner" 45.00 -p myproject -c restaurant -b alice -f bob -f charlie
"""


def register(subparsers, parents) -> None:
    parser = subparsers.add_parser(
        "add",
        parents=parents,
        help="Add an expense to a Cospend project",
        description="Add an expense to a Cospend project.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("name", help="Expense name")
    parser.add_argument("amount", help="Expense amount")
    parser.add_argument("-c", "--category", help="Category by ID or name")
    parser.add_argument(
        "-b", "--by", dest="paid_by", help="Paying member username (defaults to authenticated user)"
    )
    parser.add_argument(
        "-f",
        "--for",
        dest="paid_for",
        action="append",
        default=[],
        help="Owed member username (repeatable; defaults to payer only)",
    )
    parser.add_argument("-C", "--convert", help="Currency to convert to")
    parser.add_argument("-m", "--method", help="Payment method by ID or name")
    parser.add_argument("-o", "--comment", help="Additional details about the bill")
    parser.set_defaults(func=run)


def _resolve(resolve, project, token: str, field_name: str):
    try:
        return resolve(project, token)
    except ResolutionError as e:
        raise ValueError(f"resolving {field_name}: {e}") from e


def run(args: argparse.Namespace) -> None:
    project_id = require_project(args)

    try:
        amount = float(args.amount)
    except ValueError:
        raise ValueError(f"invalid amount: {args.amount}") from None

    client = get_client()
    project = fetch_project(client, project_id)

    payer_id = _resolve(resolve_member, project, args.paid_by or client.config.user, "payer")
    if args.paid_for:
        owed_to = [_resolve(resolve_member, project, token, "owed member") for token in args.paid_for]
    else:
        owed_to = [payer_id]

    bill = NewBill(
        what=args.name,
        amount=amount,
        payer_id=payer_id,
        owed_to=owed_to,
        date=date.today().isoformat(),
        comment=args.comment or None,
    )
    if args.category:
        bill.category_id = _resolve(resolve_category, project, args.category, "category")
    if args.method:
        bill.payment_mode_id = _resolve(resolve_payment_mode, project, args.method, "payment method")
    if args.convert:
        bill.original_currency_id = _resolve(resolve_currency, project, args.convert, "currency").id

    LOG.debug(f"Creating bill in project {project_id}: {bill}")
    try:
        client.create_bill(project_id, bill)
    except CospendAPIError as e:
        raise CospendAPIError(f"creating bill: {e}") from e

    print(f"Successfully added expense: {args.name} ({amount:.2f})")
