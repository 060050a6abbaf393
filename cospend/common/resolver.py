"""Resolve user-supplied tokens to project entities.

Tokens typed on the command line (``-b alice``, ``-c groceries``,
``-C usd``) are matched against the project's reference data in a fixed
order:

1. a decimal integer token that equals an entity ID wins outright;
2. case-insensitive exact name match (members also match their user ID);
3. categories and payment modes only: case-insensitive substring match,
   first hit in collection order;
4. currencies only: the token is read as an ISO code, translated to its
   symbol, and the first currency whose name contains that symbol wins.
"""

import re
from typing import Iterable, Optional, Sequence, TypeVar

from cospend.constants.currencies import code_to_symbol
from cospend.models import Category, Currency, Member, PaymentMode, Project

E = TypeVar("E")

_INT_TOKEN = re.compile(r"[+-]?[0-9]+")


class ResolutionError(ValueError):
    """Raised when a token matches nothing in the project."""

    def __init__(self, kind: str, token: str):
        self.kind = kind
        self.token = token
        super().__init__(f"{kind} not found: {token}")


def _match_id(entities: Sequence[E], token: str) -> Optional[E]:
    if not _INT_TOKEN.fullmatch(token):
        return None
    wanted = int(token)
    return next((e for e in entities if e.id == wanted), None)


def _match_exact(entities: Iterable[E], token: str, names) -> Optional[E]:
    lowered = token.lower()
    for entity in entities:
        if any(name.lower() == lowered for name in names(entity)):
            return entity
    return None


def _match_substring(entities: Iterable[E], token: str) -> Optional[E]:
    lowered = token.lower()
    return next((e for e in entities if lowered in e.name.lower()), None)


def _resolve(entities, token: str, kind: str, names, substring: bool = False):
    if not token:
        raise ResolutionError(kind, token)

    found = _match_id(entities, token)
    if found is None:
        found = _match_exact(entities, token, names)
    if found is None and substring:
        found = _match_substring(entities, token)
    if found is None:
        raise ResolutionError(kind, token)
    return found


def find_member(project: Project, token: str) -> Member:
    """Find a member by ID, name or Nextcloud user ID."""
    return _resolve(project.members, token, "member", lambda m: (m.name, m.user_id))


def resolve_member(project: Project, token: str) -> int:
    """Return the member ID for a token.

    Raises:
        ResolutionError: If nothing matches
    """
    return find_member(project, token).id


def resolve_category(project: Project, token: str) -> int:
    """Return the category ID for an ID, exact name or name fragment."""
    category: Category = _resolve(
        project.categories, token, "category", lambda c: (c.name,), substring=True
    )
    return category.id


def resolve_payment_mode(project: Project, token: str) -> int:
    """Return the payment mode ID for an ID, exact name or name fragment."""
    mode: PaymentMode = _resolve(
        project.payment_modes, token, "payment mode", lambda pm: (pm.name,), substring=True
    )
    return mode.id


def resolve_currency(project: Project, token: str) -> Currency:
    """Return the currency matching an ID, exact name or ISO code.

    Raises:
        ResolutionError: If nothing matches
    """
    if not token:
        raise ResolutionError("currency", token)

    try:
        return _resolve(project.currencies, token, "currency", lambda c: (c.name,))
    except ResolutionError:
        pass

    # e.g. "usd" -> "$" -> "US Dollar ($)"
    symbol = code_to_symbol(token)
    if symbol:
        for currency in project.currencies:
            if symbol in currency.name:
                return currency

    raise ResolutionError("currency", token)
