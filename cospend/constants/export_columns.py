from enum import StrEnum


class BillColumns(StrEnum):
    """String enum for column names used in bill listings (JSON keys)."""

    ID = "id"
    DATE = "date"
    NAME = "name"
    AMOUNT = "amount"
    PAID_BY = "paid_by"
    PAID_FOR = "paid_for"
    CATEGORY = "category"
    PAYMENT_METHOD = "payment_method"


# Column headers for CSV output, in output order
CSV_HEADERS = {
    BillColumns.ID: "ID",
    BillColumns.DATE: "Date",
    BillColumns.NAME: "Name",
    BillColumns.AMOUNT: "Amount",
    BillColumns.PAID_BY: "Paid By",
    BillColumns.PAID_FOR: "Paid For",
    BillColumns.CATEGORY: "Category",
    BillColumns.PAYMENT_METHOD: "Payment Method",
}

# Column headers for the table output, in output order
TABLE_HEADERS = ["ID", "DATE", "NAME", "AMOUNT", "PAID BY", "PAID FOR", "CATEGORY", "METHOD"]
