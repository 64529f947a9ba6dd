# rodger/errors.py


class RodgerError(Exception):
    """Base class for errors raised by the ledger core."""


class ValidationError(RodgerError, ValueError):
    """Input cannot be turned into a valid record."""


class NotFoundError(RodgerError, LookupError):
    """A partition or position no longer exists."""
