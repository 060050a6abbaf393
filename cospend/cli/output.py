"""Rendering of bills and reference data for the terminal."""

# Standard library
import json
from typing import Iterable, List, Optional, Sequence

# Third-party
import pandas as pd
from tabulate import tabulate

# Local application
from cospend.common.amount_format import AmountFormatter
from cospend.common.utils import clean_bill_name
from cospend.constants.cospend import MAX_NAME_WIDTH
from cospend.constants.export_columns import CSV_HEADERS, TABLE_HEADERS, BillColumns
from cospend.models import Bill, Project

TABLE_FORMAT = "simple_outline"

# Sort-only column, dropped before output
_TIMESTAMP = "_timestamp"

_COLUMNS = [c.value for c in BillColumns]


def _id_label(names: dict, entity_id: int, blank_zero: bool = False) -> str:
    name = names.get(entity_id, "")
    if name:
        return name
    if blank_zero and entity_id == 0:
        return ""
    return f"#{entity_id}"


def bills_to_frame(project: Project, bills: Iterable[Bill]) -> pd.DataFrame:
    """Resolve member/category/payment-mode IDs to names, one row per bill.

    Unknown members are shown as '#<id>'; unknown non-zero categories and
    payment modes as '#<id>', a zero ID as an empty string.
    """
    member_names = {m.id: m.name for m in project.members}
    category_names = {c.id: c.name for c in project.categories}
    payment_mode_names = {pm.id: pm.name for pm in project.payment_modes}

    rows = []
    for bill in bills:
        rows.append(
            {
                BillColumns.ID.value: bill.id,
                BillColumns.DATE.value: bill.date,
                BillColumns.NAME.value: clean_bill_name(bill.what),
                BillColumns.AMOUNT.value: bill.amount,
                BillColumns.PAID_BY.value: _id_label(member_names, bill.payer_id),
                BillColumns.PAID_FOR.value: [_id_label(member_names, o.id) for o in bill.owers],
                BillColumns.CATEGORY.value: _id_label(category_names, bill.category_id, blank_zero=True),
                BillColumns.PAYMENT_METHOD.value: _id_label(
                    payment_mode_names, bill.payment_mode_id, blank_zero=True
                ),
                _TIMESTAMP: bill.timestamp,
            }
        )
    return pd.DataFrame(rows, columns=_COLUMNS + [_TIMESTAMP])


def sort_and_limit(df: pd.DataFrame, limit: Optional[int] = None) -> pd.DataFrame:
    """Newest date first, then newest timestamp; keep the first ``limit`` rows."""
    df = df.sort_values(
        [BillColumns.DATE.value, _TIMESTAMP], ascending=[False, False], kind="mergesort"
    )
    if limit and limit > 0:
        df = df.head(limit)
    return df.drop(columns=[_TIMESTAMP]).reset_index(drop=True)


def _truncate(name: str, width: int = MAX_NAME_WIDTH) -> str:
    if len(name) > width:
        return name[: width - 3] + "..."
    return name


def render_table(headers: Sequence[str], rows: Iterable[Sequence]) -> str:
    return tabulate(list(rows), headers=list(headers), tablefmt=TABLE_FORMAT, disable_numparse=True)


def render_bills_table(df: pd.DataFrame, formatter: AmountFormatter) -> str:
    if df.empty:
        return "No bills found."

    rows = []
    for record in df.to_dict(orient="records"):
        rows.append(
            [
                str(record[BillColumns.ID]),
                record[BillColumns.DATE],
                _truncate(record[BillColumns.NAME]),
                formatter.format(record[BillColumns.AMOUNT]),
                record[BillColumns.PAID_BY],
                ", ".join(record[BillColumns.PAID_FOR]),
                record[BillColumns.CATEGORY] or "-",
                record[BillColumns.PAYMENT_METHOD] or "-",
            ]
        )

    total = float(df[BillColumns.AMOUNT.value].sum())
    table = render_table(TABLE_HEADERS, rows)
    return f"{table}\n\nTotal: {len(df)} bill(s), {formatter.format(total)}"


def render_bills_csv(df: pd.DataFrame) -> str:
    out = df.copy()
    out[BillColumns.PAID_FOR.value] = out[BillColumns.PAID_FOR.value].map(", ".join)
    out[BillColumns.AMOUNT.value] = out[BillColumns.AMOUNT.value].map(lambda v: f"{v:.2f}")
    out = out.rename(columns={col.value: header for col, header in CSV_HEADERS.items()})
    return out.to_csv(index=False, lineterminator="\n")


def render_bills_json(df: pd.DataFrame) -> str:
    records: List[dict] = []
    for record in df.to_dict(orient="records"):
        records.append(
            {
                BillColumns.ID.value: int(record[BillColumns.ID]),
                BillColumns.DATE.value: record[BillColumns.DATE],
                BillColumns.NAME.value: record[BillColumns.NAME],
                BillColumns.AMOUNT.value: float(record[BillColumns.AMOUNT]),
                BillColumns.PAID_BY.value: record[BillColumns.PAID_BY],
                BillColumns.PAID_FOR.value: list(record[BillColumns.PAID_FOR]),
                BillColumns.CATEGORY.value: record[BillColumns.CATEGORY],
                BillColumns.PAYMENT_METHOD.value: record[BillColumns.PAYMENT_METHOD],
            }
        )
    return json.dumps(records, indent=2, ensure_ascii=False)
