"""
Read-only views derived from invoices.

Presentation code reads totals from here and never recomputes status
itself. Everything is recomputed from items and payments on each call.
"""

from pydantic import BaseModel

from core import ledger
from core.models import Invoice, InvoiceStatus
from core.money import billed_total, format_amount, paid_total

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


class InvoiceSummary(BaseModel):
    """Totals shown in the editor and preview for one invoice."""

    subtotal: float
    deposit_amount: float
    other_payments: float
    total_paid: float
    tax: float = 0.0  # Tax is out of scope; always presented as zero
    balance: float
    status: InvoiceStatus
    # Display strings, e.g. "₦60,000"
    formatted_subtotal: str
    formatted_total_paid: str
    formatted_balance: str


class DashboardStats(BaseModel):
    """Aggregate figures across every invoice."""

    total_earned: float
    total_billed: float
    pending_amount: float
    paid_count: int
    pending_count: int


class MonthlyIncome(BaseModel):
    """Payments received in one calendar month, across all years."""

    month: str
    amount: float


def summarize(invoice: Invoice, currency_symbol: str = "₦") -> InvoiceSummary:
    """Derived totals for one invoice. Status is read from the aggregate."""
    subtotal = billed_total(invoice.items)
    deposit = ledger.deposit_amount(invoice.payments)
    others = ledger.other_payments_total(invoice.payments)
    total_paid = deposit + others
    remaining = subtotal - total_paid

    return InvoiceSummary(
        subtotal=subtotal,
        deposit_amount=deposit,
        other_payments=others,
        total_paid=total_paid,
        balance=remaining,
        status=invoice.status,
        formatted_subtotal=format_amount(subtotal, currency_symbol),
        formatted_total_paid=format_amount(total_paid, currency_symbol),
        formatted_balance=format_amount(remaining, currency_symbol),
    )


def dashboard_stats(invoices: list[Invoice]) -> DashboardStats:
    """
    Headline numbers for the dashboard.

    pending_amount is billed minus earned across all invoices and, like a
    single balance, is not clamped at zero.
    """
    total_earned = sum((paid_total(inv.payments) for inv in invoices), 0.0)
    total_billed = sum((billed_total(inv.items) for inv in invoices), 0.0)
    paid_count = sum(1 for inv in invoices if inv.status == InvoiceStatus.PAID)

    return DashboardStats(
        total_earned=total_earned,
        total_billed=total_billed,
        pending_amount=total_billed - total_earned,
        paid_count=paid_count,
        pending_count=len(invoices) - paid_count,
    )


def monthly_income(invoices: list[Invoice]) -> list[MonthlyIncome]:
    """
    Payments bucketed by calendar month, January to December.

    Always returns twelve points. Years are not separated.
    """
    totals = [0.0] * 12
    for invoice in invoices:
        for payment in invoice.payments:
            totals[payment.date.month - 1] += payment.amount

    return [MonthlyIncome(month=m, amount=a) for m, a in zip(MONTHS, totals)]
