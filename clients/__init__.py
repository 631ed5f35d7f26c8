# Infrastructure clients
from clients.vault_client import VaultClient, VaultError
from clients.valkey_client import ValkeyClient
from clients.llm_client import LLMClient, LLMResponse, LLMError
