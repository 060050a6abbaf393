"""Helpers shared by the cospend sub-commands."""

import argparse
from typing import Optional

from babel import Locale

from cospend.cache import get_or_fetch_project, load_user_info, save_user_info
from cospend.common.amount_format import resolve_locale
from cospend.common.cospend_client import CospendAPIError, CospendClient
from cospend.common.settings import Config, load_config
from cospend.common.utils import LOG
from cospend.models import Project


def project_parent_parser() -> argparse.ArgumentParser:
    """Parent parser so ``-d`` and ``-p`` work after the sub-command too.

    SUPPRESS keeps a value given before the sub-command from being reset.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Enable debug output",
    )
    parent.add_argument(
        "-p",
        "--project",
        type=str,
        default=argparse.SUPPRESS,
        help="Project ID",
    )
    return parent


def require_project(args: argparse.Namespace) -> str:
    project_id = getattr(args, "project", None)
    if not project_id:
        raise ValueError("project is required (use -p or --project)")
    return project_id


def get_client(config: Optional[Config] = None) -> CospendClient:
    return CospendClient(config or load_config())


def fetch_project(client: CospendClient, project_id: str) -> Project:
    """Project from the cache, or from the API (then cached)."""
    try:
        return get_or_fetch_project(project_id, client.get_project)
    except CospendAPIError as e:
        raise CospendAPIError(f"fetching project: {e}") from e


def user_locale(client: CospendClient) -> Locale:
    """The user's formatting locale, from the cache or the API.

    A failed fetch only costs the locale: amounts fall back to en_US.
    """
    user_info, found = load_user_info()
    if not found:
        try:
            user_info = client.get_user_info()
        except CospendAPIError as e:
            LOG.warning(f"Failed to fetch user info: {e}")
            return resolve_locale()
        try:
            save_user_info(user_info)
        except OSError as e:
            LOG.warning(f"Failed to cache user info: {e}")
    return resolve_locale(user_info.locale, user_info.language)
