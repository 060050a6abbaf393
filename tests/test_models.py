import json

import pytest

from cospend.models import Bill, Category, PaymentMode, Project, ProjectSummary, UserInfo
from cospend.models.project import parse_keyed_collection

PROJECT_JSON = {
    "id": "trip",
    "name": "Trip",
    "currencyname": "EUR",
    "members": [
        {"id": 1, "name": "Alice", "userid": "alice", "activated": True},
        {"id": 2, "name": "Bob", "userid": "", "activated": False},
    ],
    "categories": {
        "3": {"name": "Groceries", "icon": "🛒", "color": "#00ff00"},
        "7": {"id": 99, "name": "Rent"},
    },
    "paymentmodes": [{"id": 1, "name": "Cash"}],
    "currencies": [{"id": 4, "name": "US Dollar ($)", "exchange_rate": "1.08"}],
}


class TestProject:
    def test_from_dict(self):
        project = Project.from_dict(PROJECT_JSON)

        assert project.name == "Trip"
        assert project.currency_name == "EUR"
        assert [m.user_id for m in project.members] == ["alice", ""]
        assert project.members[1].activated is False
        assert project.currencies[0].exchange_rate == 1.08

    def test_object_keyed_categories_use_key_as_id(self):
        project = Project.from_dict(PROJECT_JSON)

        assert [(c.id, c.name) for c in project.categories] == [(3, "Groceries"), (7, "Rent")]
        assert project.categories[0].icon == "🛒"

    def test_array_payment_modes(self):
        project = Project.from_dict(PROJECT_JSON)

        assert project.payment_modes == [PaymentMode(id=1, name="Cash")]

    def test_to_dict_round_trip(self):
        project = Project.from_dict(PROJECT_JSON)

        assert Project.from_dict(json.loads(json.dumps(project.to_dict()))) == project

    def test_missing_collections(self):
        project = Project.from_dict({"id": "x", "categories": None})

        assert project.members == []
        assert project.categories == []
        assert project.payment_modes == []

    def test_non_dict_rejected(self):
        with pytest.raises(ValueError):
            Project.from_dict([1, 2])


class TestParseKeyedCollection:
    def test_json_string(self):
        raw = '{"2": {"name": "Food"}}'
        assert parse_keyed_collection(raw, Category) == [Category(id=2, name="Food")]

    def test_unusable_shape(self):
        assert parse_keyed_collection(42, Category) == []
        assert parse_keyed_collection("not json", Category) == []

    def test_non_integer_key_keeps_record_id(self):
        raw = {"abc": {"id": 5, "name": "Misc"}}
        assert parse_keyed_collection(raw, Category)[0].id == 5


class TestBill:
    def test_from_dict(self):
        bill = Bill.from_dict(
            {
                "id": 12,
                "what": "Dinner",
                "amount": 45.5,
                "date": "2026-01-15",
                "payer_id": 1,
                "owers": [{"id": 1, "weight": 1}, {"id": 2, "weight": 1}],
                "paymentmodeid": 2,
                "categoryid": 3,
                "comment": "",
                "repeat": "n",
                "timestamp": 1768471200,
            }
        )

        assert bill.amount == 45.5
        assert bill.ower_ids == [1, 2]
        assert bill.payment_mode_id == 2
        assert bill.category_id == 3
        assert bill.timestamp == 1768471200

    def test_missing_optional_fields(self):
        bill = Bill.from_dict({"id": 1, "what": "x", "amount": "3.25", "date": "2026-01-01"})

        assert bill.amount == 3.25
        assert bill.owers == []
        assert bill.category_id == 0


class TestProjectSummary:
    def test_archived(self):
        assert ProjectSummary.from_dict({"id": "a", "archived_ts": 1700000000}).is_archived
        assert not ProjectSummary.from_dict({"id": "b", "archived_ts": None}).is_archived


class TestUserInfo:
    def test_from_dict(self):
        assert UserInfo.from_dict({"locale": "en_US", "language": "en", "id": "alice"}) == UserInfo(
            locale="en_US", language="en"
        )
