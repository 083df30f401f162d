# domain/ports/plugin_ports.py
"""
Contracts for everything the bootstrap needs from the plugin system.

Both methods may be implemented synchronously or as coroutines; the
bootstrap awaits whatever comes back.
"""

from __future__ import annotations

from typing import Any, Awaitable, Dict, List, Optional, Protocol, Sequence, Union, runtime_checkable

from domain.plugins import PluginDescriptor
from domain.site_config import SiteConfig


@runtime_checkable
class PluginLoaderPort(Protocol):
    """Resolves and flattens the declared plugin list, preserving declaration order."""

    def load(self, site_config: SiteConfig) -> Union[Sequence[PluginDescriptor], Awaitable[Sequence[PluginDescriptor]]]: ...


@runtime_checkable
class PluginEventBroadcasterPort(Protocol):
    """
    Sends a named event to every plugin and collects what they return.

    Used for ``resolvableExtensions``, ``createPages`` and
    ``generateSideEffects``.
    """

    async def broadcast(self, event_name: str, payload: Optional[Dict[str, Any]] = None) -> List[Any]: ...
