"""File-backed cache for project reference data and user info.

Each entry lives in its own JSON file under the platform cache directory:

    {"project": {...}, "cached_at": "2026-01-01T10:00:00+00:00"}

Entries older than CACHE_TTL are ignored. Loading never raises: a missing,
unreadable, malformed or expired file is reported as "not found" so the
caller falls back to the API. Saving raises OSError on filesystem failure;
callers treat that as a warning.
"""

# Standard library
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar
from urllib.parse import quote

# Local application
from cospend.common.utils import LOG, mkdir_p, now_iso, parse_iso_timestamp, save_state_atomic
from cospend.constants.config import (
    CACHE_DIR_MODE,
    CACHE_FILE_MODE,
    CACHE_TTL,
    USER_INFO_CACHE_KEY,
    get_cache_dir,
)
from cospend.models import Project, UserInfo

PROJECT_FIELD = "project"
USER_INFO_FIELD = "user_info"
CACHED_AT_FIELD = "cached_at"

T = TypeVar("T")


def _cache_file_stem(key: str) -> str:
    """Map a cache key to a file stem that cannot leave the cache directory.

    Ordinary project IDs (letters, digits, '-', '_', '.') are kept verbatim;
    separators and other special characters are percent-encoded.
    """
    stem = quote(key, safe="")
    if stem in ("", ".", ".."):
        stem = stem.replace(".", "%2E") or "%00"
    return stem


def get_cache_path(key: str) -> Path:
    """Return the cache file path for a key (project ID or sentinel)."""
    return get_cache_dir() / f"{_cache_file_stem(key)}.json"


def _read_entry(key: str, payload_field: str) -> Tuple[Any, datetime]:
    """Read a raw cache entry. Raises on any problem."""
    path = get_cache_path(key)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"cache entry {path.name} is not an object")
    if payload_field not in data:
        raise ValueError(f"cache entry {path.name} has no '{payload_field}' field")
    cached_at = parse_iso_timestamp(data.get(CACHED_AT_FIELD))
    return data[payload_field], cached_at


def is_fresh(cached_at: datetime, now: Optional[datetime] = None) -> bool:
    """An entry is valid iff now - cached_at <= CACHE_TTL."""
    now = now or datetime.now(timezone.utc)
    return now - cached_at <= CACHE_TTL


def _load(key: str, payload_field: str, parse: Callable[[Any], T]) -> Tuple[Optional[T], bool]:
    try:
        payload, cached_at = _read_entry(key, payload_field)
        if not is_fresh(cached_at):
            LOG.debug(f"Cache entry '{key}' expired (cached at {cached_at.isoformat()})")
            return None, False
        return parse(payload), True
    except FileNotFoundError:
        LOG.debug(f"Cache miss for '{key}'")
    except Exception as e:
        LOG.debug(f"Ignoring unusable cache entry '{key}': {e}")
    return None, False


def _save(key: str, payload_field: str, payload: Dict[str, Any]) -> None:
    mkdir_p(get_cache_dir(), mode=CACHE_DIR_MODE)
    entry = {payload_field: payload, CACHED_AT_FIELD: now_iso()}
    save_state_atomic(str(get_cache_path(key)), entry, mode=CACHE_FILE_MODE)
    LOG.debug(f"Cached '{key}' to {get_cache_path(key)}")


def load_project(project_id: str) -> Tuple[Optional[Project], bool]:
    """Return (project, True) from a fresh cache entry, else (None, False)."""
    if not project_id:
        return None, False
    return _load(project_id, PROJECT_FIELD, Project.from_dict)


def save_project(project_id: str, project: Project) -> None:
    """Store a project snapshot, replacing any previous entry.

    Raises:
        OSError: If the cache directory or file cannot be written
    """
    if not project_id:
        raise ValueError("project ID is required to cache a project")
    _save(project_id, PROJECT_FIELD, project.to_dict())


def load_user_info() -> Tuple[Optional[UserInfo], bool]:
    """Return (user_info, True) from a fresh cache entry, else (None, False)."""
    return _load(USER_INFO_CACHE_KEY, USER_INFO_FIELD, UserInfo.from_dict)


def save_user_info(user_info: UserInfo) -> None:
    """Store the authenticated user's info.

    Raises:
        OSError: If the cache directory or file cannot be written
    """
    _save(USER_INFO_CACHE_KEY, USER_INFO_FIELD, user_info.to_dict())


def get_or_fetch_project(project_id: str, fetch: Callable[[str], Project]) -> Project:
    """Return the cached project or fetch, cache and return a fresh one.

    A failed cache write is logged and the fetched project is still returned.
    Errors from ``fetch`` propagate unchanged.
    """
    project, found = load_project(project_id)
    if found:
        return project
    project = fetch(project_id)
    try:
        save_project(project_id, project)
    except OSError as e:
        LOG.warning(f"Failed to cache project: {e}")
    return project
