import json

from cospend.cli.output import (
    bills_to_frame,
    render_bills_csv,
    render_bills_json,
    render_bills_table,
    render_table,
    sort_and_limit,
)
from cospend.common.amount_format import AmountFormatter
from cospend.models import Bill, Ower


def _bills():
    return [
        Bill(id=1, what="Groceries", amount=20, date="2026-01-10", payer_id=1,
             owers=[Ower(1), Ower(2)], category_id=1, payment_mode_id=1, timestamp=100),
        Bill(id=2, what="Taxi\nhome", amount=15.5, date="2026-01-12", payer_id=2,
             owers=[Ower(2)], timestamp=200),
        Bill(id=3, what="Coffee", amount=4, date="2026-01-12", payer_id=9,
             owers=[Ower(1), Ower(9)], category_id=42, timestamp=300),
    ]


def _frame(project, limit=None):
    return sort_and_limit(bills_to_frame(project, _bills()), limit)


class TestResolveRows:
    def test_sorted_newest_first_then_timestamp(self, project):
        assert list(_frame(project)["id"]) == [3, 2, 1]

    def test_limit_applies_after_sort(self, project):
        assert list(_frame(project, limit=2)["id"]) == [3, 2]

    def test_zero_limit_keeps_all(self, project):
        assert len(_frame(project, limit=0)) == 3

    def test_names_resolved(self, project):
        row = _frame(project).set_index("id").loc[1]

        assert row["paid_by"] == "Alice"
        assert row["paid_for"] == ["Alice", "Bob"]
        assert row["category"] == "Food"
        assert row["payment_method"] == "Cash"

    def test_unknown_ids(self, project):
        row = _frame(project).set_index("id").loc[3]

        assert row["paid_by"] == "#9"
        assert row["paid_for"] == ["Alice", "#9"]
        assert row["category"] == "#42"
        assert row["payment_method"] == ""

    def test_name_cleaned(self, project):
        assert _frame(project).set_index("id").loc[2]["name"] == "Taxi home"


class TestTable:
    def test_contents_and_footer(self, project):
        out = render_bills_table(_frame(project), AmountFormatter("EUR"))

        assert "Groceries" in out
        assert "€20.00" in out
        assert "Alice, Bob" in out
        assert out.endswith("Total: 3 bill(s), €39.50")

    def test_empty(self, project):
        df = sort_and_limit(bills_to_frame(project, []))
        assert render_bills_table(df, AmountFormatter("EUR")) == "No bills found."

    def test_long_names_truncated(self, project):
        bills = [Bill(id=1, what="x" * 31, amount=1, date="2026-01-01", payer_id=1)]
        out = render_bills_table(sort_and_limit(bills_to_frame(project, bills)), AmountFormatter(""))

        assert "x" * 27 + "..." in out
        assert "x" * 28 not in out

    def test_missing_category_shown_as_dash(self, project):
        bills = [Bill(id=1, what="a", amount=1, date="2026-01-01", payer_id=1)]
        out = render_bills_table(sort_and_limit(bills_to_frame(project, bills)), AmountFormatter(""))
        row = next(line for line in out.splitlines() if " a " in line)

        assert row.count(" - ") == 2

    def test_render_table_headers(self):
        out = render_table(["ID", "NAME"], [["007", "Bond"]])

        assert "ID" in out and "NAME" in out
        # leading zeros survive, cells are not parsed as numbers
        assert "007" in out


class TestCsv:
    def test_header_and_rows(self, project):
        lines = render_bills_csv(_frame(project)).splitlines()

        assert lines[0] == "ID,Date,Name,Amount,Paid By,Paid For,Category,Payment Method"
        assert lines[1] == '3,2026-01-12,Coffee,4.00,#9,"Alice, #9",#42,'
        assert lines[3] == '1,2026-01-10,Groceries,20.00,Alice,"Alice, Bob",Food,Cash'

    def test_empty_has_header_only(self, project):
        out = render_bills_csv(sort_and_limit(bills_to_frame(project, [])))
        assert out.splitlines() == ["ID,Date,Name,Amount,Paid By,Paid For,Category,Payment Method"]


class TestJson:
    def test_objects(self, project):
        data = json.loads(render_bills_json(_frame(project)))

        assert [d["id"] for d in data] == [3, 2, 1]
        assert data[2] == {
            "id": 1,
            "date": "2026-01-10",
            "name": "Groceries",
            "amount": 20.0,
            "paid_by": "Alice",
            "paid_for": ["Alice", "Bob"],
            "category": "Food",
            "payment_method": "Cash",
        }

    def test_empty_is_empty_list(self, project):
        assert render_bills_json(sort_and_limit(bills_to_frame(project, []))) == "[]"
