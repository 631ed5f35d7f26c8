"""Typed exceptions for invoice operations."""


class InvoiceNotFoundError(ValueError):
    """
    No invoice with the given id exists in the store.

    Subclasses ValueError so callers that treat "not found" ValueErrors
    generically keep working.
    """

    def __init__(self, invoice_id: str):
        self.invoice_id = invoice_id
        super().__init__(f"Invoice {invoice_id} not found")


class LastLineItemError(ValueError):
    """The editor must keep at least one line item on an invoice."""

    def __init__(self, invoice_id: str):
        self.invoice_id = invoice_id
        super().__init__(f"Invoice {invoice_id} must keep at least one line item")
