"""
Valkey (Redis-compatible) backend for the invoice collection.

InvoiceStore keeps every invoice as one JSON string under a single key, so
this wrapper exposes plain string reads and writes and nothing else. The URL
comes from INVOICER_VALKEY_URL or Vault.

Errors are never hidden: an unreachable server fails at construction and
a failed write raises to the caller.
"""

import logging

import redis

logger = logging.getLogger(__name__)


class ValkeyClient:
    """
    String get/set over a Valkey connection.

    Usage:
        valkey = ValkeyClient("redis://localhost:6379/0")
        valkey.set("invoicer:invoices", "[]")
        payload = valkey.get("invoicer:invoices")  # None when never written
    """

    def __init__(self, url: str, socket_timeout: float = 5.0):
        """
        Open the connection and check it answers.

        Args:
            url: Connection URL such as redis://host:6379/0
            socket_timeout: Seconds before a command gives up

        Raises:
            redis.ConnectionError: Server unreachable
        """
        self._client = redis.from_url(url, decode_responses=True, socket_timeout=socket_timeout)
        self.ping()
        logger.info(f"Connected to Valkey at {self._client.connection_pool.connection_kwargs.get('host', '?')}")

    def ping(self) -> bool:
        """True when the server answers; raises redis.ConnectionError otherwise."""
        return bool(self._client.ping())

    def get(self, key: str) -> str | None:
        """Stored string, or None for a key that was never written."""
        return self._client.get(key)

    def set(self, key: str, value: str) -> None:
        """Overwrite the value. Nothing written here expires."""
        self._client.set(key, value)

    def delete(self, key: str) -> bool:
        """Remove a key. False if there was nothing to remove."""
        return self._client.delete(key) > 0

    def close(self) -> None:
        self._client.close()
        logger.info("Valkey connection closed")
