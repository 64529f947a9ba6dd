# rodger/core/models.py
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Optional

PLACEHOLDER_ITEM = "-"
DELETED_PREFIX = "[Deleted] "
DISPLAY_DATE_FORMAT = "%d-%m-%Y"


def title_case(raw: str) -> str:
    """Upper-case the first letter of each whitespace token, lower the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in raw.split())


class TransactionType(str, Enum):
    INCOME = "income"
    RECEIVABLE = "receivable"
    EXPENSE = "expense"


@dataclass
class Intent:
    """Structured result of interpreting one command sentence.

    ``customer_name`` and ``amount`` may be ``None``; callers check both
    before committing a transaction.
    """
    is_report: bool = False
    customer_name: Optional[str] = None
    amount: Optional[float] = None
    type: Optional[TransactionType] = None
    item: Optional[str] = None
    date: Optional[str] = None
    display_date: Optional[str] = None
    time: Optional[str] = None


@dataclass
class TransactionRecord:
    sr_no: int
    customer_name: str
    item_name: str
    amount: float
    date: str
    time: str
    due: float = 0.0
    paid: float = 0.0
    expense: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TransactionRecord":
        known = {f.name for f in fields(cls)}
        missing = {"customer_name", "amount", "date"} - data.keys()
        if missing:
            raise ValueError(f"Missing {sorted(missing)} in ledger row: {data}")
        row = {k: v for k, v in data.items() if k in known}
        return cls(
            sr_no=int(row.get("sr_no", 0)),
            customer_name=str(row["customer_name"]),
            item_name=str(row.get("item_name") or PLACEHOLDER_ITEM),
            amount=float(row["amount"]),
            date=str(row["date"]),
            time=str(row.get("time", "")),
            due=float(row.get("due") or 0.0),
            paid=float(row.get("paid") or 0.0),
            expense=float(row.get("expense") or 0.0),
        )


@dataclass
class LedgerEntry:
    """A record annotated with the address needed to edit or delete it."""
    partition_key: str
    position: int
    record: TransactionRecord


@dataclass
class ItemEntry:
    name: str
    date: str

    def to_dict(self) -> dict:
        return {"name": self.name, "date": self.date}
