from rodger.core.models import Intent, TransactionType


def make_intent(name, amount, display_date, tx_type=TransactionType.RECEIVABLE, item="-"):
    return Intent(
        customer_name=name,
        amount=amount,
        type=tx_type,
        item=item,
        display_date=display_date,
        time="10:15 am",
    )
