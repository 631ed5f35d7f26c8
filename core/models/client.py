"""Billing party models: who an invoice is addressed to, and who sends it."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ClientDetails(BaseModel):
    """The client being billed. Display-only; no validation beyond presence."""

    name: str = ""
    email: str = ""
    address: str = ""
    business_name: str = ""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @property
    def display_name(self) -> str:
        """Human-readable name for display."""
        return self.business_name or self.name or "Unnamed Client"


class UserProfile(BaseModel):
    """The freelancer's billing header. Static, never mutated by the core."""

    name: str = ""
    title: str = ""
    email: str = ""
    business_name: str = ""
    logo: str | None = None
    website: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}
