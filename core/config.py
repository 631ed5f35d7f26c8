"""
Invoicer configuration.

Values come from the environment (a .env file is loaded first). When
VAULT_ADDR is set, secrets missing from the environment are read from Vault.
"""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from core.models import UserProfile

logger = logging.getLogger(__name__)

DEFAULT_VALKEY_URL = "redis://localhost:6379/0"


class InvoicerConfig(BaseModel):
    """Runtime configuration for the invoicing core and its collaborators."""

    # Persistence
    valkey_url: str = Field(
        default=DEFAULT_VALKEY_URL,
        description="Connection URL of the key-value store",
    )
    store_key: str = Field(
        default="invoicer:invoices",
        description="Key holding the JSON-serialized invoice collection",
        min_length=1,
    )

    # Text generation
    llm_api_key: str | None = Field(
        default=None,
        description="Anthropic API key. None disables AI copy and insights (fallbacks only)",
    )
    llm_model: str = Field(
        default="claude-haiku-4-5",
        description="Model used for copy-editing and insights",
    )
    llm_timeout_seconds: float = Field(
        default=30.0,
        description="Per-request timeout for the LLM",
        gt=0,
        le=300,
    )

    # Invoice defaults
    due_days: int = Field(
        default=14,
        description="Days between issue date and due date on new invoices",
        ge=1,
        le=365,
    )
    currency_symbol: str = Field(
        default="₦",
        description="Symbol used when formatting amounts for display",
    )
    profile: UserProfile = Field(
        default_factory=UserProfile,
        description="Freelancer billing header shown on every invoice",
    )

    @property
    def ai_enabled(self) -> bool:
        return bool(self.llm_api_key)


def _env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _load_profile() -> UserProfile:
    return UserProfile(
        name=_env("INVOICER_PROFILE_NAME") or "",
        title=_env("INVOICER_PROFILE_TITLE") or "",
        email=_env("INVOICER_PROFILE_EMAIL") or "",
        business_name=_env("INVOICER_PROFILE_BUSINESS_NAME") or "",
        logo=_env("INVOICER_PROFILE_LOGO"),
        website=_env("INVOICER_PROFILE_WEBSITE"),
    )


def load_config(vault=None) -> InvoicerConfig:
    """
    Build configuration from the environment.

    Args:
        vault: Optional VaultClient. If None and VAULT_ADDR is set, one is
            created to fill in secrets missing from the environment.

    Returns:
        Validated InvoicerConfig

    Raises:
        pydantic.ValidationError: If a value is out of range
        VaultError: If Vault is configured but unreachable
    """
    load_dotenv()

    valkey_url = _env("INVOICER_VALKEY_URL")
    llm_api_key = _env("ANTHROPIC_API_KEY")

    if (valkey_url is None or llm_api_key is None) and vault is None and _env("VAULT_ADDR"):
        from clients.vault_client import VaultClient

        vault = VaultClient()

    if vault is not None:
        if valkey_url is None:
            valkey_url = vault.get_valkey_url()
        if llm_api_key is None:
            llm_api_key = vault.get_llm_api_key()

    values = {
        "valkey_url": valkey_url or DEFAULT_VALKEY_URL,
        "llm_api_key": llm_api_key,
        "profile": _load_profile(),
    }
    optional = {
        "store_key": _env("INVOICER_STORE_KEY"),
        "llm_model": _env("INVOICER_LLM_MODEL"),
        "llm_timeout_seconds": _env("INVOICER_LLM_TIMEOUT_SECONDS"),
        "due_days": _env("INVOICER_DUE_DAYS"),
        "currency_symbol": _env("INVOICER_CURRENCY_SYMBOL"),
    }
    values.update({k: v for k, v in optional.items() if v is not None})

    config = InvoicerConfig(**values)
    if not config.ai_enabled:
        logger.info("No Anthropic API key configured; AI copy will use fallbacks")
    return config
