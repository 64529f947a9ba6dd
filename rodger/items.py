# rodger/items.py
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Dict, List

from rodger.core.models import (
    DELETED_PREFIX,
    DISPLAY_DATE_FORMAT,
    PLACEHOLDER_ITEM,
    ItemEntry,
    title_case,
)
from rodger.storage import load_json, save_json

logger = logging.getLogger(__name__)


def _today() -> str:
    return date.today().strftime(DISPLAY_DATE_FORMAT)


class ItemRegistry:
    """Deduplicated catalog of item names used for autocomplete.

    Names are unique case-insensitively. Items added through normal use keep
    append order; a bootstrap from the ledger inserts alphabetically.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._items: List[ItemEntry] = self._load()

    def _load(self) -> List[ItemEntry]:
        raw = load_json(self.path, list)
        if not isinstance(raw, list):
            logger.warning("Item registry %s is not a list; starting empty", self.path)
            return []

        items: List[ItemEntry] = []
        seen = set()
        migrated = False
        for entry in raw:
            if isinstance(entry, str):
                # Legacy registries stored bare names without a date.
                raw_name, first_seen = entry, _today()
                migrated = True
            elif isinstance(entry, dict) and entry.get("name"):
                raw_name, first_seen = str(entry["name"]), str(entry.get("date") or _today())
            else:
                logger.warning("Skipping malformed item entry: %r", entry)
                migrated = True
                continue

            name = title_case(raw_name.strip())
            if not name or name == PLACEHOLDER_ITEM or name.lower() in seen:
                migrated = True
                continue
            if name != raw_name:
                migrated = True
            seen.add(name.lower())
            items.append(ItemEntry(name=name, date=first_seen))

        if migrated:
            logger.info("Normalized item registry %s (%d items)", self.path, len(items))
            self._items = items
            self.save()
        return items

    def save(self) -> None:
        save_json(self.path, [item.to_dict() for item in self._items])

    def _find(self, name: str) -> ItemEntry | None:
        lowered = name.lower()
        return next((i for i in self._items if i.name.lower() == lowered), None)

    def get_items(self) -> List[ItemEntry]:
        return list(self._items)

    def add_item(self, raw_name: str) -> bool:
        name = title_case((raw_name or "").strip())
        if not name or name == PLACEHOLDER_ITEM:
            return False
        if name.lower().startswith(DELETED_PREFIX.lower()):
            return False
        if self._find(name):
            return False
        self._items.append(ItemEntry(name=name, date=_today()))
        self.save()
        logger.debug("Registered item %s", name)
        return True

    def search(self, query: str, limit: int | None = None) -> List[ItemEntry]:
        """Case-insensitive substring search; a blank query matches nothing."""
        needle = (query or "").strip().lower()
        if not needle:
            return []
        matches = [item for item in self._items if needle in item.name.lower()]
        return matches[:limit] if limit else matches

    def populate_from_ledger(self, ledger) -> int:
        """Seed an empty registry with every item name found in ``ledger``.

        Partitions are walked in calendar order so each entry keeps the first
        day its item was seen. Entries are inserted alphabetically.
        """
        if self._items:
            return 0

        first_seen: Dict[str, ItemEntry] = {}
        for key in ledger.partition_keys():
            for record in ledger.get_partition(key):
                raw = (record.item_name or "").strip()
                if not raw or raw == PLACEHOLDER_ITEM or raw.startswith(DELETED_PREFIX):
                    continue
                name = title_case(raw)
                first_seen.setdefault(name.lower(), ItemEntry(name=name, date=key))

        if not first_seen:
            return 0
        self._items = sorted(first_seen.values(), key=lambda i: i.name.lower())
        self.save()
        logger.info("Populated item registry with %d item(s) from ledger", len(self._items))
        return len(self._items)

    def delete_item(self, name: str, ledger) -> bool:
        """Remove ``name`` and soft-delete its references in ``ledger``.

        The registry change is persisted first, then the ledger rewrites every
        record whose item name equals ``name`` to ``"[Deleted] <name>"``.
        Amounts on those records are left untouched.
        """
        entry = next((i for i in self._items if i.name == name), None)
        if entry is None:
            return False
        self._items.remove(entry)
        self.save()

        changed = ledger.mark_item_deleted(name)
        logger.info("Deleted item %s (%d ledger record(s) marked)", name, changed)
        return True
