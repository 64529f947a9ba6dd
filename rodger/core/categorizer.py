# rodger/core/categorizer.py
from rodger.core.models import TransactionType

# Priority order matters: the first bucket with a matching keyword wins.
CLASSIFICATION_RULES = [
    (TransactionType.INCOME, (
        "jama", "received", "paisa mila", "deposit", "diya", "diye", "mile",
        "aaye", "got", "paid", "credit",
        "जमा", "दिया", "दिए", "मिले", "आये", "प्राप्त",
    )),
    (TransactionType.RECEIVABLE, (
        "udhar", "baki", "lena hai", "credit due", "debit", "due", "bakaya",
        "बाकी", "उधार", "लेना है", "बकाया",
    )),
    (TransactionType.EXPENSE, (
        "dena hai", "kharcha", "expense", "payment given", "payment",
        "paid to",
        "देना है", "खर्चा", "व्यय",
    )),
]

CONTEXT_RULES = [
    (TransactionType.INCOME, (" se ", " से ")),
    (TransactionType.RECEIVABLE, (" ko ", " को ")),
]


def categorize(text, rules):
    lowered = text.lower()
    for tx_type, keywords in rules:
        for kw in keywords:
            if kw.lower() in lowered:
                return tx_type
    return None


def classify(text):
    """Return the transaction type for a sentence, never ``None``."""
    return (
        categorize(text, CLASSIFICATION_RULES)
        or categorize(text, CONTEXT_RULES)
        or TransactionType.RECEIVABLE
    )
