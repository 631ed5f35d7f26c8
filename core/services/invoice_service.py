"""
Invoice service: the aggregate mutation contract used by the editor.

Editing works on in-memory copies. Each mutation returns a new Invoice with
its ledger and status recomputed; nothing is persisted until `save`.

Status rules:
- A new invoice is DRAFT.
- The first ledger mutation (apply_deposit, even with 0) leaves DRAFT for good.
- After that, every mutation of items or payments re-derives status.
"""

import logging
import secrets
from typing import Any
from uuid import uuid4

from core import ledger
from core.event_bus import EventBus
from core.events import DepositApplied, InvoicePaid
from core.exceptions import InvoiceNotFoundError, LastLineItemError
from core.models import ClientDetails, Invoice, InvoiceItem, InvoiceStatus, UserProfile
from core.copywriter import DEFAULT_TERMS
from core.money import billed_total, coerce_amount, paid_total
from core.reports import InvoiceSummary, summarize
from core.services.invoice_store import InvoiceStore
from core.status import derive_status
from utils.timezone import days_from_today, today_utc

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for invoice editing and payment operations."""

    def __init__(
        self,
        store: InvoiceStore,
        event_bus: EventBus | None = None,
        profile: UserProfile | None = None,
        due_days: int = 14,
        currency_symbol: str = "₦",
    ):
        self.store = store
        self.event_bus = event_bus
        self.profile = profile or UserProfile()
        self.due_days = due_days
        self.currency_symbol = currency_symbol

    def _generate_invoice_number(self) -> str:
        """
        Generate an invoice number not already used in the store.

        Format: INV-YYYY-XXXX with XXXX a random four-digit number. If random
        picks keep colliding, the lowest free number for the year is used.
        """
        prefix = f"INV-{today_utc().year}-"
        taken = {inv.invoice_number for inv in self.store.list_all()}

        for _ in range(20):
            candidate = f"{prefix}{secrets.randbelow(10000):04d}"
            if candidate not in taken:
                return candidate

        for sequence in range(10000):
            candidate = f"{prefix}{sequence:04d}"
            if candidate not in taken:
                return candidate

        # Every four-digit number is taken this year; widen the suffix
        return f"{prefix}{len(taken):05d}"

    def new_draft(self) -> Invoice:
        """
        A fresh, unsaved invoice.

        Issue date today, due date `due_days` later, one empty line item,
        no payments, DRAFT status, default terms, logo from the profile.
        """
        invoice = Invoice(
            id=str(uuid4()),
            invoice_number=self._generate_invoice_number(),
            issue_date=today_utc(),
            due_date=days_from_today(self.due_days),
            client=ClientDetails(),
            items=[InvoiceItem()],
            payments=[],
            terms=DEFAULT_TERMS,
            status=InvoiceStatus.DRAFT,
            logo=self.profile.logo,
        )
        logger.debug(f"New draft invoice {invoice.invoice_number}")
        return invoice

    def apply_deposit(self, invoice: Invoice, amount: Any) -> Invoice:
        """
        Set or clear the deposit and re-derive status.

        This always leaves DRAFT, even when the result has no payments.

        Args:
            invoice: Invoice being edited
            amount: New deposit amount; non-numeric input counts as 0

        Returns:
            Copy of the invoice with the new ledger and status
        """
        payments = ledger.set_deposit(invoice.payments, coerce_amount(amount))
        status = derive_status(billed_total(invoice.items), paid_total(payments))
        return invoice.model_copy(update={"payments": payments, "status": status})

    def refresh_status(self, invoice: Invoice) -> Invoice:
        """Re-derive status from current totals. DRAFT invoices stay DRAFT."""
        if invoice.status == InvoiceStatus.DRAFT:
            return invoice
        status = derive_status(billed_total(invoice.items), paid_total(invoice.payments))
        if status == invoice.status:
            return invoice
        return invoice.model_copy(update={"status": status})

    def replace_items(self, invoice: Invoice, items: list[InvoiceItem]) -> Invoice:
        """Swap in a new list of line items."""
        return self.refresh_status(invoice.model_copy(update={"items": list(items)}))

    def add_item(
        self,
        invoice: Invoice,
        description: str = "",
        quantity: Any = 1,
        rate: Any = 0,
    ) -> Invoice:
        """Append a line item. Quantity and rate are coerced like editor input."""
        item = InvoiceItem(description=description, quantity=quantity, rate=rate)
        return self.replace_items(invoice, [*invoice.items, item])

    def update_item(self, invoice: Invoice, item_id: str, **fields: Any) -> Invoice:
        """
        Change fields of one line item.

        Args:
            invoice: Invoice being edited
            item_id: Line item to change
            **fields: Any of description, quantity, rate

        Raises:
            ValueError: If the item is not on the invoice or a field is unknown
        """
        unknown = set(fields) - {"description", "quantity", "rate"}
        if unknown:
            raise ValueError(f"Unknown line item fields: {', '.join(sorted(unknown))}")

        items = []
        found = False
        for item in invoice.items:
            if item.id == item_id:
                # Re-validate so quantity/rate get coerced
                item = InvoiceItem.model_validate({**item.model_dump(), **fields})
                found = True
            items.append(item)

        if not found:
            raise ValueError(f"Line item {item_id} not found on invoice {invoice.id}")

        return self.replace_items(invoice, items)

    def remove_item(self, invoice: Invoice, item_id: str) -> Invoice:
        """
        Remove a line item. The last remaining line cannot be removed.

        Raises:
            LastLineItemError: If item_id is the only line
            ValueError: If the item is not on the invoice
        """
        items = [item for item in invoice.items if item.id != item_id]
        if len(items) == len(invoice.items):
            raise ValueError(f"Line item {item_id} not found on invoice {invoice.id}")
        if not items:
            raise LastLineItemError(invoice.id)
        return self.replace_items(invoice, items)

    def update_client(self, invoice: Invoice, **fields: Any) -> Invoice:
        """
        Change client details.

        Raises:
            ValueError: If a field is not one of name, email, address, business_name
        """
        unknown = set(fields) - set(ClientDetails.model_fields)
        if unknown:
            raise ValueError(f"Unknown client fields: {', '.join(sorted(unknown))}")

        client =ClientDetails.model_validate({**invoice.client.model_dump(), **fields})
        return invoice.model_copy(update={"client": client})

    def summarize(self, invoice: Invoice) -> InvoiceSummary:
        """Derived totals for display, amounts formatted with the configured symbol."""
        return summarize(invoice, self.currency_symbol)

    def save(self, invoice: Invoice) -> Invoice:
        """
        Store the invoice, replacing any saved version wholesale.

        Status is re-derived first (unless DRAFT). Publishes InvoicePaid
        when the saved invoice has just become PAID.

        Returns:
            The invoice as stored
        """
        invoice = self.refresh_status(invoice)
        previous = self.store.get(invoice.id)
        saved = self.store.save(invoice)

        was_paid = previous is not None and previous.status == InvoiceStatus.PAID
        if saved.status == InvoiceStatus.PAID and not was_paid:
            logger.info(f"Invoice {saved.invoice_number} is paid in full")
            self._publish(InvoicePaid.create(invoice=saved))

        return saved

    def record_deposit(self, invoice_id: str, amount: Any) -> Invoice:
        """
        Apply a deposit to a stored invoice and save it.

        Raises:
            InvoiceNotFoundError: If the invoice is not in the store
        """
        current = self.store.get(invoice_id)
        if current is None:
            raise InvoiceNotFoundError(invoice_id)

        updated = self.apply_deposit(current, amount)
        saved = self.save(updated)
        self._publish(DepositApplied.create(invoice=saved, amount=coerce_amount(amount)))
        return saved

    def delete(self, invoice_id: str) -> None:
        """
        Delete a stored invoice.

        Raises:
            InvoiceNotFoundError: If the invoice is not in the store
        """
        self.store.delete(invoice_id)

    def _publish(self, event) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)
