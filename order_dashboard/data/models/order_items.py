from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LineItem(BaseModel):
    """A single product line within an order."""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: int = Field(description="Line item identifier")
    name: str = Field(description="Product name at time of order")
    product_id: int = Field(description="Product identifier")
    quantity: int = Field(ge=0, description="Quantity ordered")
    price: str = Field(description="Unit price as a decimal string")
    total: str = Field(description="Line total as a decimal string")
