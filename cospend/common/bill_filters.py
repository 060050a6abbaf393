"""Bill filtering for the list command.

Filters are built in two stages so that bad input fails before any network
I/O:

1. ``FilterOptions.parse()`` validates every operator/date/recency
   expression and needs nothing but the raw flag values.
2. ``ParsedFilters.build(project)`` resolves member/category/payment-mode
   tokens against the project and returns a list of predicates.

``apply_filters`` keeps a bill only if every predicate accepts it.
"""

# Standard library
import operator
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import StrEnum
from typing import Callable, List, Optional, Sequence, Tuple

# Third-party
from dateutil.relativedelta import relativedelta

# Local application
from cospend.common.resolver import (
    ResolutionError,
    resolve_category,
    resolve_member,
    resolve_payment_mode,
)
from cospend.models import Bill, Project

BillFilter = Callable[[Bill], bool]

ISO_DATE_FORMAT = "%Y-%m-%d"

_OPERATOR_RE = re.compile(r"^(>=|<=|>|<|=)?(.+)$", re.DOTALL)
_FULL_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SHORT_DATE_RE = re.compile(r"^\d{2}-\d{2}$")
_RECENT_VALUE_RE = re.compile(r"^[+-]?\d+$")

# Leap year used only to validate MM-DD operands (accepts 02-29)
_LEAP_YEAR = 2000


class FilterError(ValueError):
    """Raised for a malformed filter expression or an unresolvable filter token."""


class Operator(StrEnum):
    """Comparison operators accepted in amount and date filters."""

    GE = ">="
    LE = "<="
    GT = ">"
    LT = "<"
    EQ = "="


_COMPARATORS = {
    Operator.GE: operator.ge,
    Operator.LE: operator.le,
    Operator.GT: operator.gt,
    Operator.LT: operator.lt,
    Operator.EQ: operator.eq,
}


def split_operator(expr: str, kind: str) -> Tuple[Operator, str]:
    """Split '>=50' into (Operator.GE, '50'). A missing operator means '='."""
    expr = (expr or "").strip()
    match = _OPERATOR_RE.match(expr)
    if not match:
        raise FilterError(f"invalid {kind} filter format: {expr}")
    op = Operator(match.group(1) or Operator.EQ)
    return op, match.group(2).strip()


@dataclass(frozen=True)
class AmountFilter:
    """Numeric comparison against a bill's amount."""

    operator: Operator
    value: float

    @classmethod
    def parse(cls, expr: str) -> "AmountFilter":
        op, operand = split_operator(expr, "amount")
        try:
            value = float(operand)
        except ValueError:
            raise FilterError(f"invalid amount value: {operand}") from None
        return cls(operator=op, value=value)

    def matches(self, amount: float) -> bool:
        return _COMPARATORS[self.operator](amount, self.value)


@dataclass(frozen=True)
class DateFilter:
    """Comparison against a bill's ISO date.

    Zero-padded YYYY-MM-DD strings sort chronologically, so the comparison
    is done on the strings themselves.
    """

    operator: Operator
    date: str  # YYYY-MM-DD

    @classmethod
    def parse(cls, expr: str, today: Optional[date] = None) -> "DateFilter":
        op, operand = split_operator(expr, "date")
        return cls(operator=op, date=normalize_date(operand, today=today))

    def matches(self, bill_date: str) -> bool:
        return _COMPARATORS[self.operator](bill_date, self.date)


def normalize_date(value: str, today: Optional[date] = None) -> str:
    """Normalize 'YYYY-MM-DD' or 'MM-DD' (current year) to 'YYYY-MM-DD'.

    Raises:
        FilterError: If the value is in neither form or is not a real date
    """
    today = today or date.today()
    value = value.strip()
    try:
        if _FULL_DATE_RE.match(value):
            datetime.strptime(value, ISO_DATE_FORMAT)
            return value
        if _SHORT_DATE_RE.match(value):
            datetime.strptime(f"{_LEAP_YEAR}-{value}", ISO_DATE_FORMAT)
            return f"{today.year:04d}-{value}"
    except ValueError:
        pass
    raise FilterError(f"invalid date format: {value} (expected YYYY-MM-DD or MM-DD)")


def parse_recent(expr: str, today: Optional[date] = None) -> date:
    """Return the cutoff date for a recency window like '7d', '2w' or '1m'.

    Months are calendar months (2026-03-31 minus 1m is 2026-02-28).

    Raises:
        FilterError: For a short string, a non-numeric value or an unknown unit
    """
    today = today or date.today()
    expr = (expr or "").strip()
    if len(expr) < 2:
        raise FilterError(f"invalid recent format: {expr} (expected e.g. 7d, 2w, 1m)")

    value_str, unit = expr[:-1], expr[-1]
    if not _RECENT_VALUE_RE.match(value_str):
        raise FilterError(f"invalid recent value: {value_str}")
    value = int(value_str)

    if unit not in ("d", "w", "m"):
        raise FilterError(f"invalid recent unit: {unit} (expected d, w, or m)")

    try:
        if unit == "d":
            return today - timedelta(days=value)
        if unit == "w":
            return today - timedelta(days=value * 7)
        return today - relativedelta(months=value)
    except (OverflowError, ValueError):
        raise FilterError(f"invalid recent value: {value_str} (window too large)") from None


def week_bounds(today: date) -> Tuple[date, date]:
    """Monday and Sunday of the ISO week containing ``today``."""
    # isoweekday(): Monday = 1 ... Sunday = 7
    start = today - timedelta(days=today.isoweekday() - 1)
    return start, start + timedelta(days=6)


@dataclass
class FilterOptions:
    """Raw filter flag values from the list command."""

    paid_by: Optional[str] = None
    paid_for: List[str] = field(default_factory=list)
    amount: Optional[str] = None
    name: Optional[str] = None
    payment_method: Optional[str] = None
    category: Optional[str] = None
    date_expr: Optional[str] = None
    today: bool = False
    this_month: bool = False
    this_week: bool = False
    recent: Optional[str] = None

    def parse(self, today: Optional[date] = None) -> "ParsedFilters":
        """Validate all expressions. Performs no I/O.

        Raises:
            FilterError: On the first malformed expression
        """
        today = today or date.today()
        return ParsedFilters(
            options=self,
            today=today,
            amount_filter=AmountFilter.parse(self.amount) if self.amount else None,
            date_filter=DateFilter.parse(self.date_expr, today=today) if self.date_expr else None,
            recent_cutoff=parse_recent(self.recent, today=today) if self.recent else None,
        )


@dataclass
class ParsedFilters:
    """Validated filter expressions, ready to be bound to a project."""

    options: FilterOptions
    today: date
    amount_filter: Optional[AmountFilter] = None
    date_filter: Optional[DateFilter] = None
    recent_cutoff: Optional[date] = None

    def build(self, project: Project) -> List[BillFilter]:
        """Resolve identity filters against the project and return predicates.

        Raises:
            FilterError: If a member, category or payment method token does
                not resolve; no partial filter list is returned
        """
        opts = self.options
        filters: List[BillFilter] = []

        if opts.paid_by:
            payer_id = _resolve_for_filter(resolve_member, project, opts.paid_by, "payer")
            filters.append(lambda bill: bill.payer_id == payer_id)

        if opts.paid_for:
            owed_ids = {
                _resolve_for_filter(resolve_member, project, token, "owed member")
                for token in opts.paid_for
            }
            filters.append(lambda bill: owed_ids.issubset(bill.ower_ids))

        if self.amount_filter is not None:
            amount_filter = self.amount_filter
            filters.append(lambda bill: amount_filter.matches(bill.amount))

        if opts.name:
            needle = opts.name.lower()
            filters.append(lambda bill: needle in bill.what.lower())

        if opts.payment_method:
            method_id = _resolve_for_filter(
                resolve_payment_mode, project, opts.payment_method, "payment method"
            )
            filters.append(lambda bill: bill.payment_mode_id == method_id)

        if opts.category:
            category_id = _resolve_for_filter(resolve_category, project, opts.category, "category")
            filters.append(lambda bill: bill.category_id == category_id)

        if opts.today:
            today_str = self.today.strftime(ISO_DATE_FORMAT)
            filters.append(lambda bill: bill.date == today_str)

        if self.date_filter is not None:
            date_filter = self.date_filter
            filters.append(lambda bill: date_filter.matches(bill.date))

        if opts.this_month:
            prefix = self.today.strftime("%Y-%m")
            filters.append(lambda bill: bill.date.startswith(prefix))

        if opts.this_week:
            start, end = week_bounds(self.today)
            start_str, end_str = start.strftime(ISO_DATE_FORMAT), end.strftime(ISO_DATE_FORMAT)
            filters.append(lambda bill: start_str <= bill.date <= end_str)

        if self.recent_cutoff is not None:
            cutoff_str = self.recent_cutoff.strftime(ISO_DATE_FORMAT)
            filters.append(lambda bill: bill.date >= cutoff_str)

        return filters


def _resolve_for_filter(resolve, project: Project, token: str, field_name: str) -> int:
    try:
        return resolve(project, token)
    except ResolutionError as e:
        raise FilterError(f"resolving {field_name} filter: {e}") from e


def build_filters(
    project: Project, options: FilterOptions, today: Optional[date] = None
) -> List[BillFilter]:
    """Parse and build in one step (for callers that already hold the project)."""
    return options.parse(today=today).build(project)


def apply_filters(bills: Sequence[Bill], filters: Sequence[BillFilter]) -> List[Bill]:
    """Return the bills accepted by every filter, in their original order."""
    if not filters:
        return list(bills)
    return [bill for bill in bills if all(f(bill) for f in filters)]
