import json
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from cospend.cache import store
from cospend.cache.store import (
    get_cache_path,
    get_or_fetch_project,
    is_fresh,
    load_project,
    load_user_info,
    save_project,
    save_user_info,
)
from cospend.constants.config import CACHE_TTL, get_cache_dir
from cospend.models import UserInfo


def _write_entry(path, payload_field, payload, cached_at):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps({payload_field: payload, "cached_at": cached_at.isoformat()}),
        encoding="utf-8",
    )


class TestProjectCache:
    def test_save_then_load_returns_equal_project(self, project):
        save_project("trip", project)

        loaded, found = load_project("trip")

        assert found is True
        assert loaded == project

    def test_missing_entry_is_not_found(self):
        assert load_project("nope") == (None, False)

    def test_empty_project_id_is_not_found(self):
        assert load_project("") == (None, False)

    def test_save_with_empty_id_raises(self, project):
        with pytest.raises(ValueError):
            save_project("", project)

    def test_stale_entry_is_not_found(self, project):
        stale = datetime.now(timezone.utc) - CACHE_TTL - timedelta(minutes=1)
        _write_entry(get_cache_path("trip"), "project", project.to_dict(), stale)

        assert load_project("trip") == (None, False)

    def test_recent_entry_is_found(self, project):
        recent = datetime.now(timezone.utc) - timedelta(minutes=59)
        _write_entry(get_cache_path("trip"), "project", project.to_dict(), recent)

        loaded, found = load_project("trip")

        assert found is True
        assert loaded.name == "Trip"

    def test_corrupt_file_is_not_found(self):
        path = get_cache_path("trip")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{not json", encoding="utf-8")

        assert load_project("trip") == (None, False)

    def test_bad_timestamp_is_not_found(self, project):
        path = get_cache_path("trip")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps({"project": project.to_dict(), "cached_at": "yesterday"}),
            encoding="utf-8",
        )

        assert load_project("trip") == (None, False)

    def test_save_overwrites_previous_entry(self, project):
        save_project("trip", project)
        project.name = "Renamed"
        save_project("trip", project)

        loaded, _ = load_project("trip")

        assert loaded.name == "Renamed"

    def test_entry_file_layout(self, project):
        save_project("trip", project)

        data = json.loads(get_cache_path("trip").read_text(encoding="utf-8"))

        assert set(data) == {"project", "cached_at"}
        assert data["project"]["currencyname"] == "EUR"

    def test_ids_cannot_escape_cache_dir(self, project):
        cache_dir = get_cache_dir()
        for project_id in ("../evil", "a/b", "..", "."):
            path = get_cache_path(project_id)
            assert path.parent == cache_dir
            save_project(project_id, project)
            assert load_project(project_id)[1] is True

        assert sorted(p.parent for p in cache_dir.iterdir()) == [cache_dir] * 4

    def test_unwritable_cache_dir_raises_oserror(self, project, isolated_dirs):
        # A regular file where the cache root should be
        blocker = isolated_dirs / "cache"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(OSError):
            save_project("trip", project)


class TestUserInfoCache:
    def test_round_trip(self):
        save_user_info(UserInfo(locale="de_DE", language="de"))

        loaded, found = load_user_info()

        assert found is True
        assert loaded == UserInfo(locale="de_DE", language="de")

    def test_missing(self):
        assert load_user_info() == (None, False)


class TestFreshness:
    def test_boundary_is_inclusive(self):
        now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert is_fresh(now - CACHE_TTL, now=now) is True
        assert is_fresh(now - CACHE_TTL - timedelta(seconds=1), now=now) is False


class TestGetOrFetchProject:
    def test_fetches_and_caches_on_miss(self, project):
        fetch = MagicMock(return_value=project)

        assert get_or_fetch_project("trip", fetch) == project
        assert get_or_fetch_project("trip", fetch) == project
        fetch.assert_called_once_with("trip")

    def test_cache_write_failure_still_returns_project(self, project, monkeypatch):
        def broken_save(project_id, proj):
            raise OSError("disk full")

        monkeypatch.setattr(store, "save_project", broken_save)

        assert get_or_fetch_project("trip", MagicMock(return_value=project)) == project

    def test_fetch_errors_propagate(self):
        fetch = MagicMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            get_or_fetch_project("trip", fetch)
