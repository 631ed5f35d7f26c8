"""Tests for domain event models."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from conftest import make_invoice
from core.events import (
    InvoicerEvent,
    InvoiceCollectionEvent, InvoiceCreated, InvoiceUpdated, InvoiceDeleted,
    DepositApplied, InvoicePaid,
)


class TestEventBase:

    def test_events_get_unique_ids_and_timestamps(self):
        first = InvoiceDeleted.create(invoice_id="a")
        second = InvoiceDeleted.create(invoice_id="a")

        assert first.event_id != second.event_id
        assert isinstance(first.occurred_at, datetime)
        assert first.occurred_at.tzinfo is not None

    def test_events_are_frozen(self):
        event = InvoiceDeleted.create(invoice_id="a")
        with pytest.raises(FrozenInstanceError):
            event.invoice_id = "b"


class TestHierarchy:

    @pytest.mark.parametrize("event_cls", [InvoiceCreated, InvoiceUpdated, InvoiceDeleted])
    def test_collection_events(self, event_cls):
        assert issubclass(event_cls, InvoiceCollectionEvent)

    @pytest.mark.parametrize("event_cls", [DepositApplied, InvoicePaid])
    def test_ledger_events_are_not_collection_events(self, event_cls):
        assert issubclass(event_cls, InvoicerEvent)
        assert not issubclass(event_cls, InvoiceCollectionEvent)


class TestPayloads:

    def test_invoice_events_carry_invoice(self):
        invoice = make_invoice()
        assert InvoiceCreated.create(invoice=invoice).invoice == invoice
        assert InvoiceUpdated.create(invoice=invoice).invoice == invoice
        assert InvoicePaid.create(invoice=invoice).invoice == invoice

    def test_deposit_applied_carries_amount(self):
        event = DepositApplied.create(invoice=make_invoice(), amount=40000)
        assert event.amount == 40000
