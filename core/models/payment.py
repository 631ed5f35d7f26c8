"""
Payment record domain models.

The deposit is identified structurally by `kind`, not by its note. The note
"First Deposit" is still written on deposits so stored data reads the same
in older clients, and it is how untagged legacy records are recognised.
"""

import datetime as dt
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from core.money import coerce_amount
from utils.timezone import today_utc, parse_date

DEPOSIT_NOTE = "First Deposit"


class PaymentKind(str, Enum):
    """What a payment record represents."""

    DEPOSIT = "deposit"
    PAYMENT = "payment"


class PaymentRecord(BaseModel):
    """A single payment against an invoice."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    amount: float = 0.0
    date: dt.date = Field(default_factory=today_utc)
    note: str | None = None
    kind: PaymentKind = PaymentKind.PAYMENT

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_to_number(cls, value) -> float:
        return coerce_amount(value)

    @field_validator("date", mode="before")
    @classmethod
    def accept_iso_datetimes(cls, value):
        if isinstance(value, str):
            return parse_date(value)
        return value

    @property
    def is_deposit(self) -> bool:
        return self.kind == PaymentKind.DEPOSIT

    @classmethod
    def deposit(cls, amount: float) -> "PaymentRecord":
        """New deposit record dated today."""
        return cls(amount=amount, note=DEPOSIT_NOTE, kind=PaymentKind.DEPOSIT)


def tag_legacy_deposit(entries: list[Any]) -> list[Any]:
    """
    Tag untagged stored records with their kind.

    Older data has no `kind`; only the record at position 0 whose note is
    exactly "First Deposit" was treated as the deposit, so only that record
    becomes one. Every other untagged record is an ordinary payment.
    Already-built PaymentRecord objects and tagged dicts pass through.
    """
    tagged = []
    for position, entry in enumerate(entries):
        if isinstance(entry, dict) and "kind" not in entry:
            is_deposit = position == 0 and entry.get("note") == DEPOSIT_NOTE
            entry = {
                **entry,
                "kind": PaymentKind.DEPOSIT.value if is_deposit else PaymentKind.PAYMENT.value,
            }
        tagged.append(entry)
    return tagged


def leading_deposit(payments: list[PaymentRecord]) -> PaymentRecord | None:
    """The deposit at position 0, or None. Deposits never sit anywhere else."""
    if payments and payments[0].is_deposit:
        return payments[0]
    return None
