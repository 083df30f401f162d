# domain/site_config.py
from __future__ import annotations

from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PluginSpec(BaseModel):
    """A plugin entry as written in the site configuration."""
    model_config = ConfigDict(extra="forbid")

    resolve: str
    options: Dict[str, Any] = Field(default_factory=dict)


class SiteConfig(BaseModel):
    """
    Validated contents of ``site-config.yaml``.

    Unknown top-level keys are kept so plugins can read their own settings.
    """
    model_config = ConfigDict(extra="allow")

    site_metadata: Dict[str, Any] = Field(default_factory=dict)
    plugins: List[Union[str, PluginSpec]] = Field(default_factory=list)
    path_prefix: str = ""

    @field_validator("path_prefix")
    @classmethod
    def _normalise_prefix(cls, value: str) -> str:
        value = value.strip()
        if value and not value.startswith("/"):
            value = "/" + value
        return value.rstrip("/")
