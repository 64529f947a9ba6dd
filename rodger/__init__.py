# rodger/__init__.py
from rodger.core.interpreter import parse
from rodger.errors import NotFoundError, RodgerError, ValidationError
from rodger.items import ItemRegistry
from rodger.ledger import LedgerStore

__all__ = [
    "ItemRegistry",
    "LedgerStore",
    "NotFoundError",
    "RodgerError",
    "ValidationError",
    "parse",
]
