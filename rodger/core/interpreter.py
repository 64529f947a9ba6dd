# rodger/core/interpreter.py
"""Turn a free-form English/Hindi command sentence into an Intent.

The interpreter is a fixed pipeline of lexical rules. Every stage runs on
the original sentence independently, so a keyword late in the sentence can
still decide the transaction type. Parsing never raises: anything that
cannot be extracted is left as ``None`` (or the ``"-"`` item placeholder).
"""
from __future__ import annotations

import logging
import re
from datetime import datetime

from rodger.core.categorizer import classify
from rodger.core.models import DISPLAY_DATE_FORMAT, PLACEHOLDER_ITEM, Intent

logger = logging.getLogger(__name__)

REPORT_KEYWORDS = ("old records", "history", "purana")

HONORIFICS = ("ji", "bhai", "sir", "mam", "जी", "भाई", "सर", "मैम")
PARTICLES = ("ke", "se", "ko", "ne", "ka", "के", "से", "को", "ने", "का")

COMMAND_KEYWORDS = frozenset(
    kw.lower()
    for kw in (
        "Add", "Show", "Send", "Credit", "Debit", "Rupees", "Rs", "Baki",
        "Jama", "Udhaar", "Paid", "Due",
        "जोड़ें", "दिखाएं", "भेजें", "क्रेडिट", "डेबिट", "रुपये", "बाकी", "जमा",
        "उधार",
    )
)

ITEM_STOPWORDS = (
    "ke", "se", "ko", "ne", "ka", "baki", "udhaar", "diya", "lena", "mile",
    "jama", "diye", "aaye", "rupaye", "rs", "credit", "debit", "hai", "h",
    "aur", "and", "bakaya", "liya", "liye", "paid", "due", "deposit",
    "के", "से", "को", "ने", "का", "बाकी", "उधार", "दिया", "लेना", "मिले",
    "जमा", "दिए", "आये", "रुपये", "रूपये", "है", "और", "बकाया", "लिया", "लिए",
    "प्राप्त",
)

# Devanagari vowel signs are not \w, so word boundaries are spelled out.
_LETTERS = "A-Za-z\u0900-\u097F"
_WORD_CHAR = r"[\w\u0900-\u097F]"
_START = rf"(?<!{_WORD_CHAR})"
_END = rf"(?!{_WORD_CHAR})"


def _alternation(words):
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


_AMOUNT_RX = re.compile(
    r"₹?\s?(\d+(?:\.\d+)?)"
    r"(?:\s?(?:rupees|rupaye|rs|/-|रुपये|रूपये)(?![A-Za-z]))?",
    re.IGNORECASE,
)
_HONORIFIC = rf"(?:\s+(?:{_alternation(HONORIFICS)}))?"
_NAME_RX = re.compile(
    rf"^([{_LETTERS}\s]+?){_HONORIFIC}\s+(?:{_alternation(PARTICLES)}){_END}",
    re.IGNORECASE,
)
_STOPWORD_RX = re.compile(
    rf"{_START}(?:{_alternation(ITEM_STOPWORDS)}){_END}", re.IGNORECASE
)
_NOT_LETTER_RX = re.compile(rf"[^{_LETTERS}]")
_JUNK_RX = re.compile(r"[^\w\s\u0900-\u097F]")


def is_report_request(lowered):
    return any(kw in lowered for kw in REPORT_KEYWORDS)


def extract_amount(text):
    """Return ``(amount, matched_text)``; both ``None`` when absent."""
    match = _AMOUNT_RX.search(text)
    if not match:
        return None, None
    return float(match.group(1)), match.group(0)


def extract_name(text):
    """Return ``(name, pattern_match_text, fallback_token)``.

    When the anchored "<name> [honorific] <particle>" pattern matches, the
    whole match is returned for later stripping. Otherwise the first token
    is used, unless it is a command keyword or holds no letters.
    """
    match = _NAME_RX.match(text)
    if match:
        name = match.group(1).strip()
        if name:
            return name.capitalize(), match.group(0), None

    words = text.split()
    if not words:
        return None, None, None
    token = _NOT_LETTER_RX.sub("", words[0])
    if not token or token.lower() in COMMAND_KEYWORDS:
        return None, None, None
    return token.capitalize(), None, token


def extract_item(text, amount_text=None, name_match=None, name_token=None):
    description = text
    if amount_text:
        description = description.replace(amount_text, "", 1)
    if name_match:
        description = description.replace(name_match, "", 1)
    elif name_token:
        pattern = re.compile(re.escape(name_token) + _HONORIFIC, re.IGNORECASE)
        description = pattern.sub("", description, count=1)
    description = _STOPWORD_RX.sub("", description)
    description = _JUNK_RX.sub("", description)
    description = " ".join(description.split())
    return description or PLACEHOLDER_ITEM


def parse(sentence, now=None):
    """Interpret ``sentence`` and return an :class:`Intent`."""
    text = (sentence or "").strip()
    lowered = text.lower()

    if is_report_request(lowered):
        return Intent(is_report=True)

    amount, amount_text = extract_amount(text)
    tx_type = classify(lowered)
    name, name_match, name_token = extract_name(text)
    item = extract_item(text, amount_text, name_match, name_token)

    now = now or datetime.now()
    intent = Intent(
        customer_name=name,
        amount=amount,
        type=tx_type,
        item=item,
        date=now.date().isoformat(),
        display_date=now.strftime(DISPLAY_DATE_FORMAT),
        time=now.strftime("%I:%M %p").lower(),
    )
    logger.debug("Parsed %r -> %s", sentence, intent)
    return intent
