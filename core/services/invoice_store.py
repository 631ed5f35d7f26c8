"""
Invoice store: the whole invoice collection, persisted as one JSON value.

The collection is read once from the key-value store at load time and
rewritten in full after every mutation. Ordering is most-recent-first.
Saved invoices are replaced wholesale; there are no partial patches and no
concurrency checks (single user, single device).
"""

import json
import logging
from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError

from core.event_bus import EventBus
from core.events import InvoiceCreated, InvoiceDeleted, InvoiceUpdated
from core.exceptions import InvoiceNotFoundError
from core.models import Invoice

logger = logging.getLogger(__name__)

_collection_adapter = TypeAdapter(list[Any])


class KeyValueStore(Protocol):
    """What the store needs from its persistence backend (e.g. ValkeyClient)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InvoiceStore:
    """
    In-memory invoice collection mirrored to a key-value store.

    Usage:
        store = InvoiceStore(valkey, "invoicer:invoices", event_bus)
        store.load()
        store.create(invoice)
    """

    def __init__(self, kv: KeyValueStore, key: str, event_bus: EventBus | None = None):
        self.kv = kv
        self.key = key
        self.event_bus = event_bus
        self._invoices: list[Invoice] = []
        # Stored records that failed validation; written back untouched
        self._unreadable: list[Any] = []
        self.load_warning: str | None = None

    def load(self) -> list[Invoice]:
        """
        Read the collection from the key-value store.

        A missing key is an empty collection. A value that is not a JSON list
        is treated as empty; the problem is logged and kept in `load_warning`
        instead of being raised, and the stored value is left untouched until
        the next mutation overwrites it.

        Records are validated one at a time. A record that fails is skipped
        with a warning but kept aside and written back on every persist, so
        one bad invoice never costs the rest of the collection.

        Returns:
            The loaded invoices, most recent first
        """
        self.load_warning = None
        self._invoices = []
        self._unreadable = []
        raw = self.kv.get(self.key)

        if raw is None:
            logger.info(f"No stored invoices under '{self.key}'")
            return self.list_all()

        try:
            records = _collection_adapter.validate_json(raw)
        except ValidationError as e:
            self.load_warning = (
                f"Stored invoices under '{self.key}' could not be read and were ignored: "
                f"{e.error_count()} error(s)"
            )
            logger.warning(f"{self.load_warning}. First error: {e.errors()[0]['msg']}")
            return self.list_all()

        for position, record in enumerate(records):
            try:
                self._invoices.append(Invoice.model_validate(record))
            except ValidationError as e:
                self._unreadable.append(record)
                logger.warning(
                    f"Skipping stored invoice at position {position} under '{self.key}': "
                    f"{e.errors()[0]['msg']}"
                )

        if self._unreadable:
            self.load_warning = (
                f"{len(self._unreadable)} stored invoice(s) under '{self.key}' could not be "
                f"read and were skipped; they are kept in storage unchanged"
            )

        logger.info(f"Loaded {len(self._invoices)} invoices from '{self.key}'")
        return self.list_all()

    def list_all(self) -> list[Invoice]:
        """All invoices, most recent first. The list is a copy."""
        return list(self._invoices)

    def get(self, invoice_id: str) -> Invoice | None:
        """Invoice with this id, or None."""
        index = self._index_of(invoice_id)
        return None if index is None else self._invoices[index]

    def __len__(self) -> int:
        return len(self._invoices)

    def __contains__(self, invoice_id: str) -> bool:
        return self._index_of(invoice_id) is not None

    def create(self, invoice: Invoice) -> Invoice:
        """
        Add an invoice at the front of the collection.

        Raises:
            ValueError: If an invoice with the same id already exists
        """
        if invoice.id in self:
            raise ValueError(f"Invoice {invoice.id} already exists")

        self._invoices.insert(0, invoice)
        self._persist()
        self._publish(InvoiceCreated.create(invoice=invoice))
        return invoice

    def update(self, invoice: Invoice) -> Invoice:
        """
        Replace the invoice with the same id, keeping its position.

        Raises:
            InvoiceNotFoundError: If no invoice has that id (collection unchanged)
        """
        index = self._index_of(invoice.id)
        if index is None:
            raise InvoiceNotFoundError(invoice.id)

        self._invoices[index] = invoice
        self._persist()
        self._publish(InvoiceUpdated.create(invoice=invoice))
        return invoice

    def delete(self, invoice_id: str) -> None:
        """
        Remove an invoice. Immediate and unrecoverable.

        Raises:
            InvoiceNotFoundError: If no invoice has that id (collection unchanged)
        """
        index = self._index_of(invoice_id)
        if index is None:
            raise InvoiceNotFoundError(invoice_id)

        del self._invoices[index]
        self._persist()
        self._publish(InvoiceDeleted.create(invoice_id=invoice_id))

    def save(self, invoice: Invoice) -> Invoice:
        """Update if the id is known, otherwise create."""
        if invoice.id in self:
            return self.update(invoice)
        return self.create(invoice)

    # === Private ===

    def _index_of(self, invoice_id: str) -> int | None:
        for index, invoice in enumerate(self._invoices):
            if invoice.id == invoice_id:
                return index
        return None

    def _persist(self) -> None:
        """
        Write the whole collection, unreadable records last.

        Failures propagate; memory is not rolled back.
        """
        payload = json.dumps(
            [inv.model_dump(mode="json", by_alias=True) for inv in self._invoices] + self._unreadable,
            ensure_ascii=False,
        )
        self.kv.set(self.key, payload)
        logger.debug(f"Persisted {len(self._invoices)} invoices to '{self.key}'")

    def _publish(self, event) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)
