"""cospend delete: remove a bill from a project."""

import argparse

from cospend.cli.common import get_client, require_project
from cospend.common.cospend_client import CospendAPIError


def register(subparsers, parents) -> None:
    parser = subparsers.add_parser(
        "delete",
        aliases=["rm"],
        parents=parents,
        help="Delete an expense from a Cospend project",
        description=(
            "Delete an expense from a Cospend project by its bill ID. "
            "Use 'cospend list' to find the bill ID you want to delete."
        ),
    )
    parser.add_argument("bill_id", help="ID of the bill to delete")
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> None:
    project_id = require_project(args)

    try:
        bill_id = int(args.bill_id)
    except ValueError:
        raise ValueError(f"invalid bill ID: {args.bill_id}") from None

    client = get_client()
    try:
        client.delete_bill(project_id, bill_id)
    except CospendAPIError as e:
        raise CospendAPIError(f"deleting bill: {e}") from e

    print(f"Successfully deleted bill #{bill_id}")
