"""
Payment ledger operations.

A ledger is the ordered list of PaymentRecords on one invoice. It holds at
most one deposit, and the deposit always sits at position 0. The functions
here never mutate the list they are given.
"""

from core.models import PaymentRecord
from core.models.payment import leading_deposit


def deposit_of(ledger: list[PaymentRecord]) -> PaymentRecord | None:
    """The deposit record, or None if the ledger has no deposit at position 0."""
    return leading_deposit(ledger)


def deposit_amount(ledger: list[PaymentRecord]) -> float:
    """Amount of the deposit, 0 if there is none."""
    deposit = deposit_of(ledger)
    return deposit.amount if deposit else 0.0


def other_payments_total(ledger: list[PaymentRecord]) -> float:
    """Sum of every record that is not the deposit."""
    return sum((p.amount for p in ledger if not p.is_deposit), 0.0)


def set_deposit(ledger: list[PaymentRecord], amount: float) -> list[PaymentRecord]:
    """
    Set or clear the deposit.

    amount <= 0 removes the deposit. Only a record tagged as a deposit at
    position 0 is eligible; an ordinary payment there is left alone.

    amount > 0 overwrites the existing deposit's amount, keeping its id and
    date, or prepends a new deposit dated today. Re-applying the same amount
    gives the same ledger.

    All other records pass through untouched and in order.

    Args:
        ledger: Current payment records
        amount: New deposit amount

    Returns:
        New list of payment records
    """
    existing = deposit_of(ledger)
    rest = ledger[1:] if existing else list(ledger)

    if amount <= 0:
        return rest

    if existing:
        deposit = existing.model_copy(update={"amount": amount})
    else:
        deposit = PaymentRecord.deposit(amount)

    return [deposit, *rest]
