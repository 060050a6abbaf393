"""Project reference data models.

These mirror the shapes returned by the Cospend OCS API. ``to_dict`` always
emits the wire field names so a cached project can be parsed back with
``from_dict``.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cospend.common.utils import parse_float_safe


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class Member:
    """A project member."""

    id: int
    name: str = ""
    user_id: str = ""
    activated: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Member":
        return cls(
            id=_as_int(data.get("id")),
            name=data.get("name") or "",
            user_id=data.get("userid") or "",
            activated=bool(data.get("activated", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "userid": self.user_id,
            "activated": self.activated,
        }


@dataclass
class Category:
    """A bill category."""

    id: int
    name: str = ""
    icon: str = ""
    color: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            id=_as_int(data.get("id")),
            name=data.get("name") or "",
            icon=data.get("icon") or "",
            color=data.get("color") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "icon": self.icon, "color": self.color}


@dataclass
class PaymentMode(Category):
    """A payment method. Same shape as a category."""


@dataclass
class Currency:
    """An additional project currency with its exchange rate."""

    id: int
    name: str = ""
    exchange_rate: float = 1.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Currency":
        return cls(
            id=_as_int(data.get("id")),
            name=data.get("name") or "",
            exchange_rate=parse_float_safe(data.get("exchange_rate")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "exchange_rate": self.exchange_rate}


def parse_keyed_collection(raw: Any, record_cls) -> list:
    """Normalize categories/payment modes into a list of ID-tagged records.

    The API returns these as an object keyed by string-encoded ID; some
    servers (and fixtures) send a plain array instead. The object form is
    tried first and its key is authoritative for the ID when it is an
    integer. Anything else yields an empty list.

    Args:
        raw: Decoded JSON value (dict, list, or a JSON string of either)
        record_cls: Category or PaymentMode

    Returns:
        List of record_cls instances in wire order
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            return []

    if isinstance(raw, dict):
        records = []
        for key, value in raw.items():
            if not isinstance(value, dict):
                continue
            record = record_cls.from_dict(value)
            try:
                record.id = int(key)
            except (TypeError, ValueError):
                pass
            records.append(record)
        return records

    if isinstance(raw, list):
        return [record_cls.from_dict(item) for item in raw if isinstance(item, dict)]

    return []


@dataclass
class Project:
    """Snapshot of a project's reference data."""

    id: str
    name: str = ""
    currency_name: str = ""
    members: List[Member] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    payment_modes: List[PaymentMode] = field(default_factory=list)
    currencies: List[Currency] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        if not isinstance(data, dict):
            raise ValueError(f"Expected project object, got {type(data).__name__}")
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            currency_name=data.get("currencyname") or "",
            members=[Member.from_dict(m) for m in data.get("members") or []],
            categories=parse_keyed_collection(data.get("categories"), Category),
            payment_modes=parse_keyed_collection(data.get("paymentmodes"), PaymentMode),
            currencies=[Currency.from_dict(c) for c in data.get("currencies") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "currencyname": self.currency_name,
            "members": [m.to_dict() for m in self.members],
            "categories": [c.to_dict() for c in self.categories],
            "paymentmodes": [pm.to_dict() for pm in self.payment_modes],
            "currencies": [c.to_dict() for c in self.currencies],
        }


@dataclass
class ProjectSummary:
    """A row of the project list."""

    id: str
    name: str = ""
    currency_name: str = ""
    archived_ts: Optional[int] = None

    @property
    def is_archived(self) -> bool:
        return self.archived_ts is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectSummary":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            currency_name=data.get("currencyname") or "",
            archived_ts=data.get("archived_ts"),
        )


@dataclass
class UserInfo:
    """Locale settings of the authenticated Nextcloud user."""

    locale: str = ""
    language: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserInfo":
        if not isinstance(data, dict):
            raise ValueError(f"Expected user info object, got {type(data).__name__}")
        return cls(locale=data.get("locale") or "", language=data.get("language") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"locale": self.locale, "language": self.language}
