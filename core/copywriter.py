"""
LLM-assisted invoice copy.

Three advisory requests: polish a line item description, draft terms for a
service, and give one insight sentence about monthly income. None of them
may block or fail a user action: every error is logged and replaced with a
fixed fallback string.
"""

import json
import logging

from clients.llm_client import LLMClient
from core.reports import MonthlyIncome

logger = logging.getLogger(__name__)

DEFAULT_TERMS = (
    "1. All payments shall be made in Nigerian Naira (₦).\n"
    "2. A first deposit has been recorded to initiate this invoice.\n"
    "3. The final balance is due immediately after the website demo is presented "
    "and prior to final deployment.\n"
    "4. Project delivery/deployment will commence only after the full balance has been cleared."
)

FALLBACK_TERMS = (
    "1. All payments in Naira (₦).\n"
    "2. First deposit received.\n"
    "3. Balance due after demo.\n"
    "4. Deployment follows full payment."
)

EMPTY_INSIGHT = "Stay focused on regular client follow-ups."
FALLBACK_INSIGHT = "Keep track of your billing cycles for better cash flow."


class InvoiceCopywriter:
    """
    Copy-editing and insight requests for the invoice editor and dashboard.

    With no LLM client every call returns its fallback immediately, so the
    app runs without an API key.
    """

    SYSTEM_PROMPT = """You write copy for invoices sent by a freelance full stack developer.

Be concise and professional. Reply with the requested text only: no preamble, no quotes, no markdown headings."""

    TERMS_POINTS = """Use exactly these points but ensure they are professionally formatted:
1. All payments shall be made in Nigerian Naira (₦).
2. A first deposit has been recorded to initiate this invoice.
3. The final balance is due immediately after the website demo is presented and prior to final deployment.
4. Project delivery/deployment will commence only after the full balance has been cleared."""

    def __init__(self, llm: LLMClient | None):
        self.llm = llm

    def polish_description(self, description: str) -> str:
        """
        Rewrite a line item description to read more professionally.

        Returns the original description on empty output or failure.
        """
        if not description or not description.strip():
            return description

        return self._ask(
            "polish_description",
            "Rewrite this invoice line item description to be more professional "
            f'and clear: "{description}"',
            empty=description,
            fallback=description,
        )

    def generate_terms(self, service_description: str) -> str:
        """Draft a terms-and-conditions section for the given service."""
        service = service_description.strip() if service_description else ""
        return self._ask(
            "generate_terms",
            "Generate a concise, professional \"Terms and Conditions\" section for an "
            f"invoice for {service or 'Development services'}.\n{self.TERMS_POINTS}",
            empty=DEFAULT_TERMS,
            fallback=FALLBACK_TERMS,
        )

    def analyze_income(self, points: list[MonthlyIncome]) -> str:
        """One short insight or tip about revenue stability."""
        data = json.dumps([p.model_dump() for p in points])
        return self._ask(
            "analyze_income",
            "Analyze this monthly income data for a freelance developer and provide "
            f"one concise insight or tip to improve revenue stability: {data}",
            empty=EMPTY_INSIGHT,
            fallback=FALLBACK_INSIGHT,
        )

    def _ask(self, request: str, prompt: str, empty: str, fallback: str) -> str:
        """Send one prompt; substitute `empty` for blank output and `fallback` for errors."""
        if self.llm is None:
            return fallback

        try:
            response = self.llm.generate(
                messages=[
                    {"role": "system", "content": self.SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ]
            )
        except Exception as e:
            logger.warning(f"{request} failed, using fallback: {e}")
            return fallback

        text = (response.content or "").strip()
        return text or empty
