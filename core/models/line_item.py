"""
Line item domain models.

Quantities and rates are plain floats. Editor input that isn't a usable
non-negative number is coerced to 0 instead of being rejected.
"""

from uuid import uuid4

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from core.money import coerce_amount


class InvoiceItem(BaseModel):
    """One billable line on an invoice."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    description: str = ""
    quantity: float = 1.0
    rate: float = 0.0

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("quantity", "rate", mode="before")
    @classmethod
    def coerce_non_negative(cls, value) -> float:
        """Non-numeric or negative input becomes 0."""
        number = coerce_amount(value)
        return number if number > 0 else 0.0

    @field_validator("description", mode="before")
    @classmethod
    def none_as_empty(cls, value) -> str:
        return "" if value is None else value

    @property
    def total(self) -> float:
        """quantity * rate."""
        return self.quantity * self.rate
