"""Tests for configuration loading."""

from unittest.mock import Mock, patch

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_VALKEY_URL, InvoicerConfig, load_config

_ENV_VARS = [
    "INVOICER_VALKEY_URL", "INVOICER_STORE_KEY", "ANTHROPIC_API_KEY", "INVOICER_LLM_MODEL",
    "INVOICER_LLM_TIMEOUT_SECONDS", "INVOICER_DUE_DAYS", "INVOICER_CURRENCY_SYMBOL",
    "INVOICER_PROFILE_NAME", "INVOICER_PROFILE_TITLE", "INVOICER_PROFILE_EMAIL",
    "INVOICER_PROFILE_BUSINESS_NAME", "INVOICER_PROFILE_LOGO", "INVOICER_PROFILE_WEBSITE",
    "VAULT_ADDR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start from an empty environment and never read a real .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("core.config.load_dotenv"):
        yield


class TestDefaults:

    def test_empty_environment(self):
        config = load_config()

        assert config.valkey_url == DEFAULT_VALKEY_URL
        assert config.store_key == "invoicer:invoices"
        assert config.due_days == 14
        assert config.currency_symbol == "₦"
        assert config.llm_model == "claude-haiku-4-5"
        assert config.ai_enabled is False

    def test_blank_values_count_as_unset(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "   ")
        assert load_config().ai_enabled is False


class TestEnvironment:

    def test_reads_values(self, monkeypatch):
        monkeypatch.setenv("INVOICER_VALKEY_URL", "redis://cache:6379/3")
        monkeypatch.setenv("INVOICER_STORE_KEY", "acme:invoices")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        monkeypatch.setenv("INVOICER_DUE_DAYS", "30")
        monkeypatch.setenv("INVOICER_CURRENCY_SYMBOL", "$")
        monkeypatch.setenv("INVOICER_PROFILE_NAME", "Kelechi")
        monkeypatch.setenv("INVOICER_PROFILE_LOGO", "data:image/png;base64,AAA")

        config = load_config()

        assert config.valkey_url == "redis://cache:6379/3"
        assert config.store_key == "acme:invoices"
        assert config.ai_enabled is True
        assert config.due_days == 30
        assert config.currency_symbol == "$"
        assert config.profile.name == "Kelechi"
        assert config.profile.logo == "data:image/png;base64,AAA"

    @pytest.mark.parametrize("value", ["0", "400", "soon"])
    def test_invalid_due_days_rejected(self, monkeypatch, value):
        monkeypatch.setenv("INVOICER_DUE_DAYS", value)
        with pytest.raises(ValidationError):
            load_config()

    def test_model_bounds(self):
        with pytest.raises(ValidationError):
            InvoicerConfig(llm_timeout_seconds=0)


class TestVault:

    def test_fills_missing_secrets(self):
        vault = Mock()
        vault.get_valkey_url.return_value = "redis://vault:6379/0"
        vault.get_llm_api_key.return_value = "sk-vault"

        config = load_config(vault=vault)

        assert config.valkey_url == "redis://vault:6379/0"
        assert config.llm_api_key == "sk-vault"

    def test_environment_wins_over_vault(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        vault = Mock()
        vault.get_valkey_url.return_value = "redis://vault:6379/0"

        config = load_config(vault=vault)

        assert config.llm_api_key == "sk-env"
        vault.get_llm_api_key.assert_not_called()

    def test_vault_created_when_addr_set(self, monkeypatch):
        monkeypatch.setenv("VAULT_ADDR", "https://vault.example.com")
        with patch("clients.vault_client.VaultClient") as vault_cls:
            vault_cls.return_value.get_valkey_url.return_value = "redis://vault:6379/0"
            vault_cls.return_value.get_llm_api_key.return_value = "sk-vault"

            config = load_config()

        vault_cls.assert_called_once_with()
        assert config.ai_enabled is True
