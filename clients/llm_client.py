"""
Anthropic client for the invoicer's short text requests.

Every request is one prompt in, one block of plain text out: a polished line
item, a terms section, a one-sentence insight. No streaming and no tools.

    llm = LLMClient(api_key=config.llm_api_key)
    reply = llm.generate([
        {"role": "system", "content": "You write invoice copy."},
        {"role": "user", "content": "Polish: 'make website'"},
    ])

Built once by core.bootstrap and passed in; nothing here is global.
"""

import logging
from typing import Any

import anthropic
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class LLMResponse(BaseModel):
    """Text reply plus bookkeeping from the API."""

    content: str
    raw_response: dict[str, Any] | None = None
    usage: dict[str, int] | None = None


class LLMError(Exception):
    """The Anthropic API call did not succeed."""


class LLMClient:
    """Thin wrapper over anthropic.Anthropic.messages."""

    DEFAULT_MODEL = "claude-haiku-4-5"

    def __init__(self, api_key: str, model: str | None = None, timeout: float = 30.0):
        """
        Args:
            api_key: Anthropic API key
            model: Defaults to DEFAULT_MODEL
            timeout: Seconds per request

        Raises:
            ValueError: Blank api_key
        """
        if not api_key or not api_key.strip():
            raise ValueError("An Anthropic API key is required to enable AI copy")

        self.model = model or self.DEFAULT_MODEL
        self._client = anthropic.Anthropic(api_key=api_key.strip(), timeout=timeout)
        logger.info(f"Anthropic client ready ({self.model}, timeout {timeout}s)")

    def generate(
        self,
        messages: list[dict],
        temperature: float = 0.7,
        max_tokens: int = 512,
        model: str | None = None,
    ) -> LLMResponse:
        """
        Send one conversation and return the text reply.

        A "system" message is lifted out into Anthropic's `system` parameter;
        the rest are sent as-is.

        Raises:
            LLMError: The API returned an error or could not be reached
        """
        system = None
        conversation = []
        for message in messages:
            if message["role"] == "system":
                system = message["content"]
            else:
                conversation.append(message)

        params: dict[str, Any] = {
            "model": model or self.model,
            "messages": conversation,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if system:
            params["system"] = system

        try:
            reply = self._client.messages.create(**params)
        except anthropic.APIError as e:
            logger.error(f"Anthropic request failed: {e}")
            raise LLMError(f"LLM API call failed: {e}") from e

        text = "".join(block.text for block in reply.content if block.type == "text")
        usage = None
        if reply.usage:
            usage = {"input_tokens": reply.usage.input_tokens, "output_tokens": reply.usage.output_tokens}

        return LLMResponse(
            content=text,
            raw_response={"id": reply.id, "model": reply.model},
            usage=usage,
        )
