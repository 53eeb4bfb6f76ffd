from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field

from .status import OrderStatus


class OrderViewFilters(BaseModel):
    """Transient UI filters applied to the cached orders."""
    status: Union[OrderStatus, Literal["all"]] = Field(default="all", description="Exact status match, or 'all'")
    search: str = Field(default="", description="Case-insensitive match on order number or customer name")
    sort_order: Literal["newest", "oldest"] = Field(default="newest", description="Sort by creation date")
