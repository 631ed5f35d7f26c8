"""
Service wiring.

Builds every collaborator once at process start and passes it explicitly to
whatever needs it. There are no module-level clients.
"""

import logging

from clients.llm_client import LLMClient
from clients.valkey_client import ValkeyClient
from core.config import InvoicerConfig
from core.copywriter import InvoiceCopywriter
from core.event_bus import EventBus
from core.handlers.insight_refresh_handler import handle_collection_changed
from core.insights import InsightBoard
from core.services.invoice_service import InvoiceService
from core.services.invoice_store import InvoiceStore, KeyValueStore

logger = logging.getLogger(__name__)


def build_services(
    config: InvoicerConfig,
    kv: KeyValueStore | None = None,
    llm: LLMClient | None = None,
) -> dict:
    """
    Construct and wire the invoicing services.

    Args:
        config: Loaded configuration
        kv: Key-value backend. If None, a ValkeyClient is connected to
            config.valkey_url (fails fast if unreachable).
        llm: LLM client. If None, one is created when config has an API key;
            otherwise the copywriter runs on fallbacks only.

    Returns:
        Dict with keys: store, invoice, copywriter, insights, event_bus
    """
    if kv is None:
        kv = ValkeyClient(config.valkey_url)

    if llm is None and config.ai_enabled:
        llm = LLMClient(
            api_key=config.llm_api_key,
            model=config.llm_model,
            timeout=config.llm_timeout_seconds,
        )

    event_bus = EventBus()
    store = InvoiceStore(kv, config.store_key, event_bus)
    copywriter = InvoiceCopywriter(llm)
    insights = InsightBoard(copywriter)
    invoice = InvoiceService(
        store,
        event_bus=event_bus,
        profile=config.profile,
        due_days=config.due_days,
        currency_symbol=config.currency_symbol,
    )

    event_bus.subscribe("InvoiceCollectionEvent", handle_collection_changed(insights, store))

    store.load()
    insights.refresh(store.list_all())

    logger.info(f"Invoicer services ready ({len(store)} invoices)")
    return {
        "store": store,
        "invoice": invoice,
        "copywriter": copywriter,
        "insights": insights,
        "event_bus": event_bus,
    }
