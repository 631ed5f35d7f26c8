"""Status derivation: billed and paid totals in, lifecycle status out."""

from core.models import InvoiceStatus


def derive_status(billed: float, paid: float) -> InvoiceStatus:
    """
    Derive an invoice's status from its totals.

    - PAID when paid covers billed and there is something billed
    - PARTIALLY_PAID when anything has been paid otherwise
    - PENDING when nothing has been paid

    An empty invoice with no payments is PENDING, not PAID.
    DRAFT is never returned; it only exists until the ledger is first touched.
    """
    if billed > 0 and paid >= billed:
        return InvoiceStatus.PAID
    if paid > 0:
        return InvoiceStatus.PARTIALLY_PAID
    return InvoiceStatus.PENDING
