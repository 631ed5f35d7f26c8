"""
Invoice domain models.

Amounts are floats at full precision. The stored `status` is derived from
billed vs paid totals by core.status; nothing sets it directly except the
initial DRAFT value at creation.
"""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from core.models.client import ClientDetails
from core.models.line_item import InvoiceItem
from core.models.payment import PaymentRecord, leading_deposit, tag_legacy_deposit
from core.money import balance, billed_total, paid_total
from utils.timezone import parse_date


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    DRAFT = "draft"
    PENDING = "pending"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"

    @property
    def label(self) -> str:
        """Display label, e.g. 'partially paid'."""
        return self.value.replace("_", " ")


class Invoice(BaseModel):
    """Full invoice aggregate as stored."""

    id: str
    invoice_number: str
    issue_date: dt.date | None = None
    due_date: dt.date | None = None
    client: ClientDetails = Field(default_factory=ClientDetails)
    items: list[InvoiceItem] = Field(default_factory=list)
    payments: list[PaymentRecord] = Field(default_factory=list)
    terms: str = ""
    status: InvoiceStatus = InvoiceStatus.DRAFT
    logo: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("issue_date", "due_date", mode="before")
    @classmethod
    def blank_date_as_none(cls, value):
        """The editor stores a cleared date input as an empty string."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, str):
            return parse_date(value.strip())
        return value

    @field_validator("payments", mode="before")
    @classmethod
    def tag_untagged_payments(cls, value):
        if isinstance(value, list):
            return tag_legacy_deposit(value)
        return value

    @model_validator(mode="after")
    def single_leading_deposit(self) -> "Invoice":
        """At most one deposit, and only at position 0."""
        positions = [i for i, p in enumerate(self.payments) if p.is_deposit]
        if len(positions) > 1:
            raise ValueError(f"Invoice {self.id} has {len(positions)} deposit records")
        if positions and positions[0] != 0:
            raise ValueError(
                f"Invoice {self.id} has its deposit at position {positions[0]}, expected 0"
            )
        return self

    @property
    def subtotal(self) -> float:
        """Sum of line totals."""
        return billed_total(self.items)

    @property
    def total_paid(self) -> float:
        """Sum of all payments, deposit included."""
        return paid_total(self.payments)

    @property
    def balance_due(self) -> float:
        """Remaining amount. Negative when overpaid."""
        return balance(self.items, self.payments)

    @property
    def deposit(self) -> PaymentRecord | None:
        """The deposit record, if one is recorded."""
        return leading_deposit(self.payments)

    @property
    def is_paid(self) -> bool:
        """Whether invoice is fully paid."""
        return self.status == InvoiceStatus.PAID
