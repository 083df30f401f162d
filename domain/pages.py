# domain/pages.py
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Page(BaseModel):
    """
    A single page known to the site.

    ``route_path`` is the registry key. Records are frozen: a page is only
    ever changed by upserting a complete replacement.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    component_path: str = Field(
        ...,
        alias="component",
        description="Absolute path of the component file that renders the page.",
    )
    route_path: str = Field(
        ...,
        alias="path",
        description="Canonical route, unique within the registry.",
    )
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fold_extra_keys(cls, data: Any) -> Any:
        # Plugins hand us loose mappings ({component, path, context, ...});
        # anything that is not a known field belongs to the metadata.
        if not isinstance(data, dict):
            return data
        known = {"component", "component_path", "path", "route_path", "metadata"}
        extra = {k: v for k, v in data.items() if k not in known}
        if not extra:
            return data
        folded = {k: v for k, v in data.items() if k in known}
        folded["metadata"] = {**extra, **dict(data.get("metadata") or {})}
        return folded

    def with_route(self, route_path: str) -> "Page":
        return self.model_copy(update={"route_path": route_path}, deep=True)
