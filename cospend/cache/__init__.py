"""Local cache of project reference data and user info."""

from .store import (
    get_or_fetch_project,
    load_project,
    load_user_info,
    save_project,
    save_user_info,
)

__all__ = [
    "get_or_fetch_project",
    "load_project",
    "load_user_info",
    "save_project",
    "save_user_info",
]
