"""Bill data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cospend.common.utils import parse_float_safe


@dataclass
class Ower:
    """A member owing a share of a bill."""

    id: int
    weight: float = 1.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ower":
        return cls(id=int(data.get("id") or 0), weight=parse_float_safe(data.get("weight", 1.0)))


@dataclass
class Bill:
    """A bill as returned by the API. Never cached."""

    id: int
    what: str = ""
    amount: float = 0.0
    date: str = ""  # ISO date (YYYY-MM-DD)
    payer_id: int = 0
    owers: List[Ower] = field(default_factory=list)
    comment: str = ""
    payment_mode_id: int = 0
    category_id: int = 0
    repeat: str = ""
    timestamp: int = 0  # creation instant, epoch seconds

    @property
    def ower_ids(self) -> List[int]:
        return [ower.id for ower in self.owers]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bill":
        return cls(
            id=int(data.get("id") or 0),
            what=data.get("what") or "",
            amount=parse_float_safe(data.get("amount")),
            date=data.get("date") or "",
            payer_id=int(data.get("payer_id") or 0),
            owers=[Ower.from_dict(o) for o in data.get("owers") or []],
            comment=data.get("comment") or "",
            payment_mode_id=int(data.get("paymentmodeid") or 0),
            category_id=int(data.get("categoryid") or 0),
            repeat=data.get("repeat") or "",
            timestamp=int(data.get("timestamp") or 0),
        )


@dataclass
class NewBill:
    """Payload for creating a bill."""

    what: str
    amount: float
    payer_id: int
    owed_to: List[int]
    date: str  # ISO date (YYYY-MM-DD)
    comment: Optional[str] = None
    payment_mode_id: Optional[int] = None
    category_id: Optional[int] = None
    original_currency_id: Optional[int] = None
