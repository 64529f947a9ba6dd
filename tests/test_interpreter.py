from datetime import datetime

import pytest

from rodger.core.categorizer import CLASSIFICATION_RULES, categorize, classify
from rodger.core.interpreter import parse
from rodger.core.models import TransactionType

NOW = datetime(2026, 3, 5, 17, 30)


def test_parse_basic_income_sentence():
    intent = parse("Ramesh se 500 mile", now=NOW)
    assert intent.is_report is False
    assert intent.customer_name == "Ramesh"
    assert intent.amount == 500
    assert intent.type == TransactionType.INCOME
    assert intent.item == "-"


def test_parse_timestamps():
    intent = parse("Ramesh se 500 mile", now=NOW)
    assert intent.date == "2026-03-05"
    assert intent.display_date == "05-03-2026"
    assert intent.time == "05:30 pm"


@pytest.mark.parametrize("sentence", [
    "show old records",
    "Ramesh ka History dikhao",
    "purana hisaab",
])
def test_report_request_short_circuits(sentence):
    intent = parse(sentence, now=NOW)
    assert intent.is_report is True
    assert intent.customer_name is None
    assert intent.amount is None
    assert intent.type is None


def test_item_is_extracted_after_stripping_name_amount_and_particles():
    intent = parse("Ramesh ko 50 ka sugar diya", now=NOW)
    assert intent.customer_name == "Ramesh"
    assert intent.amount == 50
    assert intent.item == "sugar"


def test_receivable_with_item():
    intent = parse("Suresh ko 200 ka chawal baki", now=NOW)
    assert intent.type == TransactionType.RECEIVABLE
    assert intent.customer_name == "Suresh"
    assert intent.item == "chawal"


def test_expense_bucket():
    intent = parse("Mohan ko 300 dena hai", now=NOW)
    assert intent.type == TransactionType.EXPENSE
    assert intent.amount == 300


def test_bucket_order_beats_context_particle():
    # "ko" suggests a receivable but the income keyword wins.
    assert parse("Ramesh ko 500 diye", now=NOW).type == TransactionType.INCOME
    # "credit" is an income keyword and is checked before "credit due".
    assert parse("Ramesh 500 credit due", now=NOW).type == TransactionType.INCOME


@pytest.mark.parametrize("sentence, expected", [
    ("Ramesh se 500", TransactionType.INCOME),
    ("Ramesh ko 500", TransactionType.RECEIVABLE),
    ("Ramesh 500", TransactionType.RECEIVABLE),
    ("रमेश से 500", TransactionType.INCOME),
    ("रमेश को 500", TransactionType.RECEIVABLE),
])
def test_contextual_fallback(sentence, expected):
    assert parse(sentence, now=NOW).type == expected


def test_devanagari_sentence():
    intent = parse("रमेश से 500 मिले", now=NOW)
    assert intent.customer_name == "रमेश"
    assert intent.amount == 500
    assert intent.type == TransactionType.INCOME
    assert intent.item == "-"


def test_honorific_and_currency_unit_are_stripped():
    intent = parse("Ramesh ji se 1000 rs jama", now=NOW)
    assert intent.customer_name == "Ramesh"
    assert intent.amount == 1000
    assert intent.type == TransactionType.INCOME
    assert intent.item == "-"


def test_leading_currency_glyph_and_decimal_amount():
    assert parse("Sita ko ₹250 baki", now=NOW).amount == 250
    intent = parse("Sita ko 99.50 baki", now=NOW)
    assert intent.amount == 99.5
    assert intent.item == "-"


def test_fallback_name_uses_first_token():
    intent = parse("Ramesh 500 rupees baki", now=NOW)
    assert intent.customer_name == "Ramesh"
    assert intent.amount == 500
    assert intent.item == "-"


def test_fallback_rejects_command_keyword():
    intent = parse("Baki 500", now=NOW)
    assert intent.customer_name is None
    assert intent.amount == 500


def test_multi_word_name_is_only_capitalised():
    intent = parse("ram KUMAR ko 100 baki", now=NOW)
    assert intent.customer_name == "Ram kumar"


def test_missing_fields_never_raise():
    intent = parse("Ramesh se mile", now=NOW)
    assert intent.amount is None
    assert intent.customer_name == "Ramesh"

    empty = parse("", now=NOW)
    assert empty.customer_name is None
    assert empty.amount is None
    assert empty.item == "-"
    assert empty.type == TransactionType.RECEIVABLE


def test_categorize_uses_rule_order():
    assert categorize("kharcha diya", CLASSIFICATION_RULES) == TransactionType.INCOME
    assert categorize("nothing here", CLASSIFICATION_RULES) is None
    assert classify("nothing here") == TransactionType.RECEIVABLE
