from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from bootstrap.config.bootstrap_config import BootstrapConfig
from bootstrap.signals.bootstrap_signals import BootstrapSignalEmitter
from core.registry.page_registry import PageLike, PageRegistry
from domain.pages import Page
from domain.plugins import PluginDescriptor
from domain.ports.config_loader_port import ConfigLoaderPort
from domain.ports.file_probe_port import FileProbePort
from domain.ports.frontmatter_port import FrontmatterLoaderPort
from domain.ports.plugin_ports import PluginEventBroadcasterPort, PluginLoaderPort
from domain.ports.query_ports import QueryExecutorPort, SchemaBuilderPort
from domain.program import Program
from domain.site_config import SiteConfig
from infrastructure.event_bus.memory_event_bus import MemoryEventBus

logger = logging.getLogger(__name__)


class PageActions:
    """The page-writing surface handed to plugins in event payloads."""

    def __init__(self, registry: PageRegistry):
        self._registry = registry

    def upsert_page(self, page: PageLike) -> Page:
        return self._registry.upsert(page)

    # Plugins ported from the original API call this name.
    create_page = upsert_page


@dataclass
class BootstrapContext:
    """
    Everything a bootstrap run reads and writes.

    Passed explicitly to every phase and to every plugin event, so no phase
    needs process-wide state.
    """
    config: BootstrapConfig
    run_id: str
    page_registry: PageRegistry
    event_bus: MemoryEventBus
    signal_emitter: BootstrapSignalEmitter
    config_loader: ConfigLoaderPort
    plugin_loader: PluginLoaderPort
    broadcaster_factory: Callable[[List[PluginDescriptor]], PluginEventBroadcasterPort]
    file_probe: FileProbePort
    frontmatter_loader: FrontmatterLoaderPort
    schema_builder: SchemaBuilderPort
    query_executor: QueryExecutorPort

    program: Optional[Program] = None
    site_config: Optional[SiteConfig] = None
    plugins: List[PluginDescriptor] = field(default_factory=list)
    broadcaster: Optional[PluginEventBroadcasterPort] = None
    schema: Any = None
    runtime_modules: Dict[str, str] = field(default_factory=dict)
    explicit_routes: List[str] = field(default_factory=list)
    drain_event: Optional[asyncio.Event] = None
    completed_phases: List[str] = field(default_factory=list)

    @property
    def actions(self) -> PageActions:
        return PageActions(self.page_registry)

    async def run_query(self, query: str, context: Optional[Dict[str, Any]] = None) -> Any:
        """Query execution bound to this run's schema; handed to plugins as ``graphql``."""
        return await self.query_executor.run(query, context or {})

    def plugin_event_payload(self, **extra: Any) -> Dict[str, Any]:
        return {'context': self, 'actions': self.actions, **extra}
