from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    """Billing or shipping address attached to an order."""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    first_name: str = Field(default="", description="Given name")
    last_name: str = Field(default="", description="Family name")
    address_1: str = Field(default="", description="Street address")
    address_2: Optional[str] = Field(default=None, description="Apartment, suite, etc.")
    city: str = Field(default="", description="City")
    state: str = Field(default="", description="State or county code")
    postcode: str = Field(default="", description="Postal code")
    country: str = Field(default="", description="Country code")
    email: Optional[str] = Field(default=None, description="Contact email (billing only)")
    phone: Optional[str] = Field(default=None, description="Contact phone")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
