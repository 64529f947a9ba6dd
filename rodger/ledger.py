# rodger/ledger.py
from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional

from rodger.core.models import (
    DELETED_PREFIX,
    DISPLAY_DATE_FORMAT,
    PLACEHOLDER_ITEM,
    LedgerEntry,
    TransactionRecord,
    TransactionType,
    title_case,
)
from rodger.errors import NotFoundError, ValidationError
from rodger.storage import load_json, save_json

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"customer_name", "item_name", "amount", "time", "due", "paid", "expense"}
)
NUMERIC_FIELDS = frozenset({"amount", "due", "paid", "expense"})

_TYPE_FIELD = {
    TransactionType.RECEIVABLE: "due",
    TransactionType.INCOME: "paid",
    TransactionType.EXPENSE: "expense",
}


def parse_partition_key(key: str) -> Optional[date]:
    """Return the calendar date of a ``DD-MM-YYYY`` key, or ``None``."""
    try:
        return datetime.strptime(key, DISPLAY_DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None


def _as_date(value, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError(f"Invalid {field_name}: {value}") from exc


def _non_negative(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number, got {value!r}")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative, got {value!r}")
    return number


def _canonical_item(raw) -> str:
    name = (raw or "").strip()
    if not name or name == PLACEHOLDER_ITEM or name.startswith(DELETED_PREFIX):
        return name or PLACEHOLDER_ITEM
    return title_case(name)


class LedgerStore:
    """Day-partitioned transaction ledger persisted as one JSON document.

    Each partition is keyed by its ``DD-MM-YYYY`` date and holds records in
    creation order. The record at index ``i`` always has ``sr_no == i + 1``.
    Every mutation writes the whole ledger back before returning.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._partitions: Dict[str, List[TransactionRecord]] = self._load()

    # -- persistence -------------------------------------------------------

    def _load(self) -> Dict[str, List[TransactionRecord]]:
        raw = load_json(self.path, dict)
        if not isinstance(raw, dict):
            logger.warning("Ledger %s is not a mapping; starting empty", self.path)
            return {}

        partitions: Dict[str, List[TransactionRecord]] = {}
        for key, rows in raw.items():
            if not isinstance(rows, list):
                logger.warning("Skipping malformed partition %r in %s", key, self.path)
                continue
            records = []
            for row in rows:
                try:
                    records.append(TransactionRecord.from_dict(row))
                except (AttributeError, TypeError, ValueError) as exc:
                    logger.warning("Skipping malformed row in %r: %s", key, exc)
            _renumber(records)
            partitions[key] = records
        return partitions

    def save(self) -> None:
        save_json(
            self.path,
            {
                key: [r.to_dict() for r in records]
                for key, records in self._partitions.items()
            },
        )

    # -- queries -----------------------------------------------------------

    def get_partition(self, date_key: str) -> List[TransactionRecord]:
        return list(self._partitions.get(date_key, []))

    @staticmethod
    def today_key() -> str:
        return date.today().strftime(DISPLAY_DATE_FORMAT)

    def get_today(self) -> List[TransactionRecord]:
        return self.get_partition(self.today_key())

    def partition_keys(self) -> List[str]:
        """Partition keys in calendar order; unparseable keys sort last."""

        def sort_key(key):
            parsed = parse_partition_key(key)
            return (parsed is None, parsed or date.min, key)

        return sorted(self._partitions, key=sort_key)

    def get_range(
        self,
        start_date,
        end_date,
        customer: str | None = None,
    ) -> List[LedgerEntry]:
        """Return records of every partition dated within ``[start, end]``.

        Parameters
        ----------
        start_date, end_date:
            ISO formatted strings or ``date`` objects, both inclusive.
        customer:
            Optional case-insensitive substring of the customer name.
        """
        start = _as_date(start_date, "start_date")
        end = _as_date(end_date, "end_date")
        if start > end:
            raise ValidationError("start_date must be on or before end_date")
        needle = customer.strip().lower() if customer else ""

        entries: List[tuple] = []
        for key, records in self._partitions.items():
            day = parse_partition_key(key)
            if day is None:
                logger.warning("Skipping partition with unparseable key %r", key)
                continue
            if not start <= day <= end:
                continue
            for position, record in enumerate(records):
                if needle and needle not in record.customer_name.lower():
                    continue
                entries.append((day, record.sr_no, LedgerEntry(key, position, record)))

        entries.sort(key=lambda e: (e[0], e[1]))
        return [entry for _, _, entry in entries]

    # -- mutations ---------------------------------------------------------

    def add_transaction(self, intent) -> TransactionRecord:
        """Create a record from a parsed intent and file it under its day.

        ``intent`` is an :class:`~rodger.core.models.Intent` or a mapping
        with the same keys.
        """
        data = dict(intent) if isinstance(intent, Mapping) else asdict(intent)

        name = (data.get("customer_name") or "").strip().capitalize()
        if not name or data.get("amount") is None:
            raise ValidationError("Missing customer name or amount.")
        amount = _non_negative(data["amount"], "amount")

        try:
            tx_type = TransactionType(data.get("type") or TransactionType.RECEIVABLE)
        except ValueError as exc:
            raise ValidationError(f"Unknown transaction type: {data.get('type')!r}") from exc

        sheet_date = data.get("display_date") or self.today_key()
        parsed = parse_partition_key(sheet_date)
        if parsed is None or parsed.strftime(DISPLAY_DATE_FORMAT) != sheet_date:
            raise ValidationError(f"display_date must be DD-MM-YYYY, got {sheet_date!r}")
        partition = self._partitions.setdefault(sheet_date, [])

        record = TransactionRecord(
            sr_no=len(partition) + 1,
            customer_name=name,
            item_name=_canonical_item(data.get("item")),
            amount=amount,
            date=sheet_date,
            time=data.get("time") or datetime.now().strftime("%I:%M %p").lower(),
        )
        setattr(record, _TYPE_FIELD[tx_type], amount)

        partition.append(record)
        self.save()
        logger.info(
            "Added %s #%d for %s (%s %.2f)",
            sheet_date, record.sr_no, name, tx_type.value, amount,
        )
        return record

    def _locate(self, partition_key: str, position: int) -> List[TransactionRecord]:
        partition = self._partitions.get(partition_key)
        if partition is None:
            raise NotFoundError(f"No partition for {partition_key}")
        if not 0 <= position < len(partition):
            raise NotFoundError(f"No entry at position {position} in {partition_key}")
        return partition

    def update_transaction(
        self, partition_key: str, position: int, fields: dict
    ) -> TransactionRecord:
        """Overwrite fields of one record.

        ``due``/``paid``/``expense`` are not recomputed; each stays
        independently editable after creation.
        """
        partition = self._locate(partition_key, position)

        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")
        changes = {}
        for key, value in fields.items():
            if key in NUMERIC_FIELDS:
                changes[key] = _non_negative(value, key)
            elif key == "item_name":
                changes[key] = _canonical_item(str(value))
            elif key == "customer_name":
                changes[key] = str(value).strip().capitalize()
            else:
                changes[key] = str(value).strip()
        if "customer_name" in changes and not changes["customer_name"]:
            raise ValidationError("customer_name must not be empty")

        record = partition[position]
        for key, value in changes.items():
            setattr(record, key, value)
        self.save()
        return record

    def delete_transaction(self, partition_key: str, position: int) -> TransactionRecord:
        partition = self._locate(partition_key, position)
        removed = partition.pop(position)
        _renumber(partition)
        self.save()
        logger.info("Deleted %s #%d (%s)", partition_key, removed.sr_no, removed.customer_name)
        return removed

    def mark_item_deleted(self, name: str) -> int:
        """Prefix every reference to item ``name`` with the deleted marker."""
        changed = 0
        for records in self._partitions.values():
            for record in records:
                if record.item_name == name:
                    record.item_name = DELETED_PREFIX + name
                    changed += 1
        if changed:
            self.save()
        return changed


def _renumber(records: List[TransactionRecord]) -> None:
    for index, record in enumerate(records):
        record.sr_no = index + 1
