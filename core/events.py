"""
Domain events for invoicing.

Immutable event objects describing changes to the invoice collection.
The store and the invoice service publish what happened; handlers react
without the publisher knowing who is listening.

Event Categories:
- Collection events: an invoice was created, replaced or deleted in the store
- Ledger events: a deposit was set or cleared, an invoice became fully paid

Events carry the full invoice so handlers never need to re-read the store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class InvoicerEvent:
    """Base class for all invoicing domain events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


# =============================================================================
# COLLECTION EVENTS
# =============================================================================


@dataclass(frozen=True)
class InvoiceCollectionEvent(InvoicerEvent):
    """Events raised by the invoice store after it persists a change."""
    pass


@dataclass(frozen=True)
class InvoiceCreated(InvoiceCollectionEvent):
    """A new invoice was added to the front of the collection."""
    invoice: Any = None  # Invoice (Any avoids a circular import)

    @classmethod
    def create(cls, invoice: Any) -> "InvoiceCreated":
        return cls(invoice=invoice)


@dataclass(frozen=True)
class InvoiceUpdated(InvoiceCollectionEvent):
    """An invoice was replaced wholesale."""
    invoice: Any = None

    @classmethod
    def create(cls, invoice: Any) -> "InvoiceUpdated":
        return cls(invoice=invoice)


@dataclass(frozen=True)
class InvoiceDeleted(InvoiceCollectionEvent):
    """An invoice was removed. Only the id survives."""
    invoice_id: str = ""

    @classmethod
    def create(cls, invoice_id: str) -> "InvoiceDeleted":
        return cls(invoice_id=invoice_id)


# =============================================================================
# LEDGER EVENTS
# =============================================================================


@dataclass(frozen=True)
class DepositApplied(InvoicerEvent):
    """The deposit on an invoice was set, changed or cleared (amount 0)."""
    invoice: Any = None
    amount: float = 0.0

    @classmethod
    def create(cls, invoice: Any, amount: float) -> "DepositApplied":
        return cls(invoice=invoice, amount=amount)


@dataclass(frozen=True)
class InvoicePaid(InvoicerEvent):
    """An invoice moved into PAID status."""
    invoice: Any = None

    @classmethod
    def create(cls, invoice: Any) -> "InvoicePaid":
        return cls(invoice=invoice)
