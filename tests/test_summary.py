from rodger.core.models import TransactionType
from rodger.summary import summarize_by_day, totals
from tests.helpers import make_intent


def test_totals(ledger):
    ledger.add_transaction(make_intent("A", 500, "05-03-2026", TransactionType.INCOME))
    ledger.add_transaction(make_intent("B", 200, "05-03-2026", TransactionType.RECEIVABLE))
    ledger.add_transaction(make_intent("C", 50.5, "05-03-2026", TransactionType.EXPENSE))

    assert totals(ledger.get_partition("05-03-2026")) == {
        "amount": 750.5,
        "due": 200.0,
        "paid": 500.0,
        "expense": 50.5,
    }


def test_totals_empty():
    assert totals([]) == {"amount": 0.0, "due": 0.0, "paid": 0.0, "expense": 0.0}


def test_summarize_by_day(ledger):
    ledger.add_transaction(make_intent("A", 10, "10-03-2026", TransactionType.INCOME))
    ledger.add_transaction(make_intent("B", 20, "02-03-2026"))
    ledger.add_transaction(make_intent("C", 30, "10-03-2026", TransactionType.EXPENSE))

    df = summarize_by_day(ledger.get_range("2026-03-01", "2026-03-31"))

    assert list(df.index) == ["02-03-2026", "10-03-2026"]
    assert df.loc["10-03-2026", "transactions"] == 2
    assert df.loc["10-03-2026", "amount"] == 40
    assert df.loc["10-03-2026", "paid"] == 10
    assert df.loc["10-03-2026", "expense"] == 30
    assert df.loc["02-03-2026", "due"] == 20


def test_summarize_by_day_empty():
    df = summarize_by_day([])
    assert df.empty
    assert list(df.columns) == ["transactions", "amount", "due", "paid", "expense"]
