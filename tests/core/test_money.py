"""Tests for money arithmetic helpers."""

import pytest

from core.models import InvoiceItem, PaymentRecord
from core.money import balance, billed_total, coerce_amount, format_amount, line_total, paid_total


class TestCoerceAmount:
    """Editor input coercion."""

    @pytest.mark.parametrize("value, expected", [
        (5, 5.0),
        (2.5, 2.5),
        ("40000", 40000.0),
        (" 1,250.50 ", 1250.5),
        ("-3", -3.0),
    ])
    def test_numbers_pass_through(self, value, expected):
        """Numbers and numeric strings become floats."""
        assert coerce_amount(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", None, [], {}, float("nan"), float("inf"), "inf", True])
    def test_garbage_becomes_zero(self, value):
        """Anything unusable becomes 0 instead of raising."""
        assert coerce_amount(value) == 0.0


class TestTotals:
    """Line, billed and paid totals."""

    def test_line_total_is_quantity_times_rate(self):
        assert line_total(InvoiceItem(quantity=3, rate=2500)) == 7500

    def test_billed_total_sums_lines(self):
        items = [InvoiceItem(quantity=2, rate=100), InvoiceItem(quantity=0.5, rate=50)]
        assert billed_total(items) == 225

    def test_billed_total_of_empty_list_is_zero(self):
        assert billed_total([]) == 0

    def test_paid_total_sums_payments(self):
        payments = [PaymentRecord(amount=100), PaymentRecord(amount=250.5)]
        assert paid_total(payments) == 350.5

    def test_balance_is_not_clamped(self):
        """Overpayment leaves a negative balance."""
        items = [InvoiceItem(quantity=1, rate=100)]
        payments = [PaymentRecord(amount=150)]
        assert balance(items, payments) == -50


class TestFormatAmount:
    """Display formatting."""

    def test_groups_thousands(self):
        assert format_amount(100000) == "₦100,000"

    def test_keeps_significant_decimals(self):
        assert format_amount(1234.5) == "₦1,234.5"

    def test_negative_sign_before_symbol(self):
        assert format_amount(-500) == "-₦500"

    def test_zero(self):
        assert format_amount(0, symbol="$") == "$0"
