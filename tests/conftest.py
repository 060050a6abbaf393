"""Shared fixtures.

Every test runs with its own HOME, cache and config directories and with
the NEXTCLOUD_* variables cleared, so nothing touches the real user setup.
"""

import pytest

from cospend.models import Category, Currency, Member, PaymentMode, Project


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ("NEXTCLOUD_DOMAIN", "NEXTCLOUD_USER", "NEXTCLOUD_PASSWORD"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def project():
    return Project(
        id="trip",
        name="Trip",
        currency_name="EUR",
        members=[
            Member(id=1, name="Alice", user_id="alice"),
            Member(id=2, name="Bob", user_id="bob"),
            Member(id=3, name="Carol", user_id="carol"),
        ],
        categories=[
            Category(id=1, name="Food", icon="🍔"),
            Category(id=2, name="Foobar"),
            Category(id=5, name="Transport", icon="🚌"),
        ],
        payment_modes=[
            PaymentMode(id=1, name="Cash"),
            PaymentMode(id=2, name="Credit Card"),
        ],
        currencies=[
            Currency(id=1, name="US Dollar ($)", exchange_rate=1.1),
            Currency(id=2, name="GBP", exchange_rate=0.85),
        ],
    )
