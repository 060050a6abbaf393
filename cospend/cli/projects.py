"""cospend projects: list the projects the user can access."""

import argparse

from cospend.cli.common import get_client
from cospend.cli.output import render_table
from cospend.common.cospend_client import CospendAPIError


def register(subparsers, parents) -> None:
    parser = subparsers.add_parser(
        "projects",
        aliases=["proj"],
        parents=parents,
        help="List Cospend projects",
        description="List all Cospend projects you have access to.",
    )
    parser.add_argument(
        "-a",
        "--all",
        dest="show_all",
        action="store_true",
        help="Show all projects including archived",
    )
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> None:
    client = get_client()
    try:
        projects = client.get_projects()
    except CospendAPIError as e:
        raise CospendAPIError(f"fetching projects: {e}") from e

    visible = [p for p in projects if args.show_all or not p.is_archived]
    if not visible:
        print("No projects found.")
        return

    rows = [[p.id, p.name, p.currency_name or "-"] for p in visible]
    print(render_table(["ID", "NAME", "CURRENCY"], rows))
    print(f"\nTotal: {len(visible)} project(s)")
