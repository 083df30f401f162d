# domain/plugins.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class PluginDescriptor(BaseModel):
    """A resolved plugin: where its files live and the options it was declared with."""
    model_config = ConfigDict(frozen=True)

    name: str
    resolve_path: str = Field(..., description="Absolute path of the plugin directory.")
    options: Dict[str, Any] = Field(default_factory=dict)
    version: Optional[str] = None


class HookDescriptor(BaseModel):
    """
    A plugin's participation in one integration surface.

    ``hook_file_path`` is ``None`` when the plugin does not implement the
    surface; such descriptors never reach code generation.
    """
    model_config = ConfigDict(frozen=True)

    hook_file_path: Optional[str] = None
    options: Any = Field(default_factory=dict)

    @property
    def is_implemented(self) -> bool:
        return bool(self.hook_file_path)
