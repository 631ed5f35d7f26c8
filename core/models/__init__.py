"""Core domain models."""

from core.models.client import ClientDetails, UserProfile
from core.models.line_item import InvoiceItem
from core.models.payment import PaymentRecord, PaymentKind, DEPOSIT_NOTE
from core.models.invoice import Invoice, InvoiceStatus

__all__ = [
    # Parties
    "ClientDetails", "UserProfile",
    # Line items
    "InvoiceItem",
    # Payments
    "PaymentRecord", "PaymentKind", "DEPOSIT_NOTE",
    # Invoice
    "Invoice", "InvoiceStatus",
]
