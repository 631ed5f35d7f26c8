"""
Handler for invoice collection events.

Whenever the stored collection changes, starts a fresh dashboard insight
request. The request runs in the background; the handler returns at once.
"""

import logging
from typing import Callable

from core.events import InvoiceCollectionEvent

logger = logging.getLogger(__name__)


def handle_collection_changed(insight_board, invoice_store) -> Callable:
    """
    Factory that returns an InvoiceCollectionEvent handler.

    Args:
        insight_board: InsightBoard instance
        invoice_store: InvoiceStore to read the current collection from

    Returns:
        Handler callable that refreshes the insight
    """

    def handler(event: InvoiceCollectionEvent):
        logger.debug(f"Refreshing insight after {type(event).__name__}")
        insight_board.refresh(invoice_store.list_all())

    return handler
