"""cospend info: show the account and, optionally, a project's reference data."""

import argparse
from decimal import Decimal

from cospend.cache import load_project, load_user_info, save_project, save_user_info
from cospend.cli.common import get_client
from cospend.cli.output import render_table
from cospend.common.cospend_client import CospendAPIError, CospendClient
from cospend.common.settings import normalize_url
from cospend.common.utils import LOG
from cospend.models import Project, UserInfo


def register(subparsers, parents) -> None:
    parser = subparsers.add_parser(
        "info",
        parents=parents,
        help="Show account and configuration info",
        description=(
            "Show the configured Nextcloud server, authenticated user, and user "
            "locale/language. When --project is set, also show project details."
        ),
    )
    parser.add_argument(
        "--cached",
        action="store_true",
        help="Use cached data instead of fetching fresh from API",
    )
    parser.set_defaults(func=run)


def _get_user_info(client: CospendClient, cached: bool) -> UserInfo:
    if cached:
        user_info, found = load_user_info()
        if found:
            return user_info

    try:
        user_info = client.get_user_info()
    except CospendAPIError as e:
        raise CospendAPIError(f"fetching user info: {e}") from e
    try:
        save_user_info(user_info)
    except OSError as e:
        LOG.warning(f"Failed to cache user info: {e}")
    return user_info


def _get_project(client: CospendClient, project_id: str, cached: bool) -> Project:
    if cached:
        project, found = load_project(project_id)
        if found:
            return project

    try:
        project = client.get_project(project_id)
    except CospendAPIError as e:
        raise CospendAPIError(f"fetching project: {e}") from e
    try:
        save_project(project_id, project)
    except OSError as e:
        LOG.warning(f"Failed to cache project: {e}")
    return project


def format_rate(rate: float) -> str:
    """Shortest positional form of a rate: 1.5, 3, 0.00001."""
    return format(Decimal(repr(float(rate))).normalize(), "f")


def print_project(project: Project) -> None:
    print(f"\nProject:  {project.name}")
    print(f"Currency: {project.currency_name}")

    print("\nMembers:")
    print(render_table(["ID", "Name", "UserID"], [[m.id, m.name, m.user_id] for m in project.members]))

    if project.categories:
        print("\nCategories:")
        print(render_table(["ID", "Icon", "Name"], [[c.id, c.icon, c.name] for c in project.categories]))

    if project.payment_modes:
        print("\nPayment Modes:")
        print(
            render_table(["ID", "Icon", "Name"], [[pm.id, pm.icon, pm.name] for pm in project.payment_modes])
        )

    if project.currencies:
        print("\nCurrencies:")
        rows = [[c.id, c.name, format_rate(c.exchange_rate)] for c in project.currencies]
        print(render_table(["ID", "Name", "Exchange Rate"], rows))


def run(args: argparse.Namespace) -> None:
    client = get_client()
    user_info = _get_user_info(client, args.cached)

    print(f"Server:   {normalize_url(client.config.domain)}")
    print(f"User:     {client.config.user}")
    print(f"Locale:   {user_info.locale}")
    print(f"Language: {user_info.language}")

    project_id = getattr(args, "project", None)
    if project_id:
        print_project(_get_project(client, project_id, args.cached))
