# rodger/summary.py
from __future__ import annotations

from typing import Dict, Iterable

import pandas as pd

from rodger.core.models import LedgerEntry, TransactionRecord

AMOUNT_COLUMNS = ["amount", "due", "paid", "expense"]


def _frame(records: Iterable[TransactionRecord]) -> pd.DataFrame:
    rows = [r.to_dict() for r in records]
    return pd.DataFrame(rows, columns=["date", "sr_no", *AMOUNT_COLUMNS])


def totals(records: Iterable[TransactionRecord]) -> Dict[str, float]:
    """Sum of amount, due, paid and expense over ``records``."""
    df = _frame(records)
    return {col: float(df[col].sum()) for col in AMOUNT_COLUMNS}


def summarize_by_day(entries: Iterable[LedgerEntry]) -> pd.DataFrame:
    """Per-partition sums for range query results, in calendar order.

    The frame is indexed by partition key and has a ``transactions`` count
    column next to the amount columns.
    """
    entries = list(entries)
    df = _frame(e.record for e in entries)
    if df.empty:
        return pd.DataFrame(columns=["transactions", *AMOUNT_COLUMNS])

    df["partition"] = [e.partition_key for e in entries]
    df["_day"] = pd.to_datetime(df["partition"], format="%d-%m-%Y")
    grouped = (
        df.groupby(["_day", "partition"], sort=True)
        .agg(transactions=("sr_no", "count"), **{c: (c, "sum") for c in AMOUNT_COLUMNS})
        .reset_index(level="_day", drop=True)
    )
    return grouped
