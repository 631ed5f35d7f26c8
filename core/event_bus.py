"""
Event bus for invoicing domain events.

Synchronous in-process pub/sub. Handlers execute immediately in the same
thread as the publisher. Handler errors are logged but never propagate:
the store has already persisted the change.
"""

import logging
from typing import Callable, Dict, List

from core.events import InvoicerEvent

logger = logging.getLogger(__name__)


class EventBus:
    """
    In-process event bus for invoicing events.

    Subscribe by event class name (string), publish by event instance.
    A subscription to a base class name (e.g. 'InvoiceCollectionEvent')
    receives every subclass event too. Handlers are called synchronously,
    most specific class first, then in subscription order.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable):
        """
        Subscribe to events of a specific type.

        Args:
            event_type: Name of event class to subscribe to (e.g. 'InvoiceCreated')
            callback: Function to call when event is published
        """
        self._subscribers.setdefault(event_type, []).append(callback)

    def publish(self, event: InvoicerEvent):
        """
        Publish an event to all subscribers of its class and base classes.

        Args:
            event: InvoicerEvent instance to publish
        """
        for cls in type(event).__mro__:
            for callback in self._subscribers.get(cls.__name__, []):
                try:
                    callback(event)
                except Exception:
                    logger.exception(
                        "Handler %s failed for %s (event_id=%s)",
                        getattr(callback, "__name__", repr(callback)),
                        type(event).__name__,
                        event.event_id,
                    )
