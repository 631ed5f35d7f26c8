"""Shared test fixtures for the invoicer test suite."""

import json
from datetime import date
from unittest.mock import Mock

import pytest

from clients.llm_client import LLMClient, LLMResponse
from core.event_bus import EventBus
from core.models import Invoice, InvoiceItem, InvoiceStatus, PaymentKind, PaymentRecord
from core.services.invoice_service import InvoiceService
from core.services.invoice_store import InvoiceStore


STORE_KEY = "test:invoices"


# =============================================================================
# KEY-VALUE FIXTURES
# =============================================================================


class FakeKeyValueStore:
    """Dict-backed stand-in for ValkeyClient. Records every write."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append((key, value))

    def stored_json(self, key: str = STORE_KEY):
        return json.loads(self.data[key])


@pytest.fixture
def kv() -> FakeKeyValueStore:
    """Empty key-value store."""
    return FakeKeyValueStore()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def store(kv, event_bus) -> InvoiceStore:
    """Loaded, empty InvoiceStore over the fake backend."""
    s = InvoiceStore(kv, STORE_KEY, event_bus)
    s.load()
    return s


@pytest.fixture
def invoice_service(store, event_bus) -> InvoiceService:
    return InvoiceService(store, event_bus=event_bus)


# =============================================================================
# LLM FIXTURES
# =============================================================================


@pytest.fixture
def mock_llm():
    """LLMClient mock answering every request with 'Polished text.'"""
    llm = Mock(spec=LLMClient)
    llm.generate.return_value = LLMResponse(content="Polished text.", raw_response=None)
    return llm


# =============================================================================
# INVOICE FIXTURES
# =============================================================================


def make_invoice(
    items: list[tuple[float, float]] | None = None,
    payments: list[PaymentRecord] | None = None,
    status: InvoiceStatus = InvoiceStatus.DRAFT,
    invoice_id: str = "inv-1",
) -> Invoice:
    """Build an invoice from (quantity, rate) pairs."""
    pairs = [(1, 100000)] if items is None else items
    return Invoice(
        id=invoice_id,
        invoice_number=f"INV-2025-{abs(hash(invoice_id)) % 10000:04d}",
        issue_date=date(2025, 3, 1),
        due_date=date(2025, 3, 15),
        items=[
            InvoiceItem(id=f"{invoice_id}-item-{i}", description=f"Line {i}", quantity=q, rate=r)
            for i, (q, r) in enumerate(pairs)
        ],
        payments=payments or [],
        status=status,
    )


def make_payment(amount: float, payment_id: str = "pay-1", when: date = date(2025, 3, 5)) -> PaymentRecord:
    """An ordinary (non-deposit) payment."""
    return PaymentRecord(id=payment_id, amount=amount, date=when, note="Bank transfer", kind=PaymentKind.PAYMENT)


@pytest.fixture
def project_invoice() -> Invoice:
    """One line of 1 x 100,000, no payments, still a draft."""
    return make_invoice()
