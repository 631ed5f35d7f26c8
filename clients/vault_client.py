"""
HashiCorp Vault lookup for invoicer secrets.

Only used when VAULT_ADDR is set and a secret is missing from the
environment. Logs in with AppRole (VAULT_ROLE_ID / VAULT_SECRET_ID) and reads
KV v2 secrets under the `invoicer/` mount path:

    invoicer/llm     api_key   Anthropic key
    invoicer/valkey  url       Valkey connection URL
"""

import logging
import os

import hvac
from hvac.exceptions import Forbidden, InvalidPath, Unauthorized

logger = logging.getLogger(__name__)

_SECRET_PREFIX = "invoicer"


class VaultError(Exception):
    """Vault could not be reached, refused us, or lacks the secret."""


class VaultClient:
    """AppRole-authenticated reader for invoicer secrets. Values are cached per instance."""

    def __init__(self, vault_addr: str | None = None, vault_namespace: str | None = None):
        """
        Log in to Vault.

        Args:
            vault_addr: Server URL. Defaults to VAULT_ADDR.
            vault_namespace: Enterprise namespace. Defaults to VAULT_NAMESPACE.

        Raises:
            ValueError: Address or AppRole credentials missing
            VaultError: Login rejected
        """
        addr = vault_addr or os.getenv("VAULT_ADDR")
        if not addr:
            raise ValueError("VAULT_ADDR environment variable is required")

        role_id = os.getenv("VAULT_ROLE_ID")
        secret_id = os.getenv("VAULT_SECRET_ID")
        if not (role_id and secret_id):
            raise ValueError("VAULT_ROLE_ID and VAULT_SECRET_ID must both be set to read invoicer secrets")

        namespace = vault_namespace or os.getenv("VAULT_NAMESPACE")
        self.vault_addr = addr
        self.client = hvac.Client(url=addr, **({"namespace": namespace} if namespace else {}))
        self._cache: dict[str, str] = {}

        self._login(role_id, secret_id)
        logger.info(f"Reading invoicer secrets from Vault at {addr}")

    def _login(self, role_id: str, secret_id: str) -> None:
        try:
            result = self.client.auth.approle.login(role_id=role_id, secret_id=secret_id)
        except Exception as e:
            logger.error(f"Vault AppRole login rejected: {e}")
            raise VaultError(f"AppRole authentication failed: {e}") from e

        self.client.token = result["auth"]["client_token"]
        if not self.client.is_authenticated():
            raise VaultError("Vault authentication failed: token not accepted")

    def get_secret(self, path: str, field: str) -> str:
        """
        One field of a secret under invoicer/.

        Args:
            path: Secret name relative to invoicer/, e.g. 'llm'
            field: Key inside the secret, e.g. 'api_key'

        Raises:
            VaultError: Secret missing or access denied
            KeyError: Secret exists but has no such field
        """
        full_path = f"{_SECRET_PREFIX}/{path}"
        cache_key = f"{full_path}#{field}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        try:
            secret = self.client.secrets.kv.v2.read_secret_version(
                path=full_path, raise_on_deleted_version=True
            )
        except InvalidPath as e:
            raise VaultError(f"No secret at '{full_path}'") from e
        except (Unauthorized, Forbidden) as e:
            logger.error(f"Vault denied read of {full_path}: {e}")
            raise VaultError(f"Access denied to '{full_path}': {e}") from e

        data = secret["data"]["data"]
        if field not in data:
            raise KeyError(f"Secret '{full_path}' has no field '{field}'. Available: {', '.join(data)}")

        self._cache[cache_key] = data[field]
        return data[field]

    def get_llm_api_key(self) -> str:
        return self.get_secret("llm", "api_key")

    def get_valkey_url(self) -> str:
        return self.get_secret("valkey", "url")
