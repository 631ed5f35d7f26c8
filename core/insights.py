"""
Dashboard income insight, refreshed in the background.

A refresh never blocks the caller: the LLM request runs on a worker thread
and the caller gets a Future back. Every request takes a sequence token;
a response is shown only if no newer request was made since, so a slow
stale response can never overwrite a fresher one.

The board only owns display text. It never reads or writes invoice
financial fields beyond the payment data it summarizes.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from core.copywriter import InvoiceCopywriter
from core.models import Invoice
from core.reports import monthly_income

logger = logging.getLogger(__name__)

LOADING_TEXT = "Analyzing your data..."
NO_INVOICES_TEXT = "Start creating invoices to see financial insights."


class InsightBoard:
    """Holds the latest insight sentence and refreshes it asynchronously."""

    def __init__(self, copywriter: InvoiceCopywriter, executor: ThreadPoolExecutor | None = None):
        """
        Args:
            copywriter: Source of insight text
            executor: Worker pool. If None, a single-thread pool is created
                and owned by the board.
        """
        self.copywriter = copywriter
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="insight"
        )
        self._lock = threading.Lock()
        self._latest_token = 0
        self._text = LOADING_TEXT

    @property
    def text(self) -> str:
        """The insight currently on display."""
        with self._lock:
            return self._text

    @property
    def latest_token(self) -> int:
        with self._lock:
            return self._latest_token

    def refresh(self, invoices: list[Invoice]) -> Future:
        """
        Start a new insight request for the given invoices.

        With no invoices the placeholder text is shown straight away and no
        request is sent; the returned Future is already resolved.

        Returns:
            Future resolving to True if this request's text was displayed,
            False if a newer request superseded it.
        """
        token = self._next_token()

        if not invoices:
            self._apply(token, NO_INVOICES_TEXT)
            done: Future = Future()
            done.set_result(True)
            return done

        points = [p for p in monthly_income(invoices) if p.amount > 0]
        return self._executor.submit(self._run, token, points)

    def close(self) -> None:
        """Stop the worker pool if the board created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    # === Private ===

    def _next_token(self) -> int:
        with self._lock:
            self._latest_token += 1
            return self._latest_token

    def _run(self, token: int, points) -> bool:
        text = self.copywriter.analyze_income(points)
        return self._apply(token, text)

    def _apply(self, token: int, text: str) -> bool:
        """Show text only if token is still the latest request."""
        with self._lock:
            if token != self._latest_token:
                logger.debug(
                    f"Discarding stale insight (token {token}, latest {self._latest_token})"
                )
                return False
            self._text = text
            return True
