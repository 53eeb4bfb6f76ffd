from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConnectionConfig(BaseModel):
    """Store URL and access token used for every API call.

    Validation of the URL scheme happens when the config is saved, so an
    incomplete config can still be held by the connection form.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    url: str = Field(default="", description="Store base URL, http:// or https://")
    token: str = Field(default="", description="Value sent in the dashboard token header")
