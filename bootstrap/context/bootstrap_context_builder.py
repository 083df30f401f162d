from __future__ import annotations
import logging
from typing import Any, Callable, List, Optional

from bootstrap.config.bootstrap_config import BootstrapConfig
from bootstrap.config.config_loader import SiteConfigLoader
from bootstrap.context.bootstrap_context import BootstrapContext
from bootstrap.signals.bootstrap_signals import BootstrapSignalEmitter
from core.exceptions import BootstrapContextBuildError
from core.registry.page_registry import PageRegistry
from domain.plugins import PluginDescriptor
from domain.ports.config_loader_port import ConfigLoaderPort
from domain.ports.file_probe_port import FileProbePort
from domain.ports.frontmatter_port import FrontmatterLoaderPort
from domain.ports.plugin_ports import PluginEventBroadcasterPort, PluginLoaderPort
from domain.ports.query_ports import QueryExecutorPort, SchemaBuilderPort
from infrastructure.event_bus.memory_event_bus import MemoryEventBus
from infrastructure.file_probe import GlobFileProbe
from infrastructure.frontmatter import YamlFrontmatterLoader
from infrastructure.query.page_query_runner import PageQueryRunner
from infrastructure.schema.site_schema import SiteSchemaBuilder
from plugins.api_runner import PluginApiRunner
from plugins.plugin_loader import LocalPluginLoader

__all__ = ['BootstrapContextBuilder', 'create_bootstrap_context']

logger = logging.getLogger(__name__)

BroadcasterFactory = Callable[[List[PluginDescriptor]], PluginEventBroadcasterPort]


class BootstrapContextBuilder:
    """
    Assembles a ``BootstrapContext``.

    Every collaborator can be supplied; anything left out gets the default
    implementation from ``infrastructure`` or ``plugins``.
    """

    def __init__(self, run_id: str) -> None:
        run_id = (run_id or '').strip()
        if not run_id:
            raise BootstrapContextBuildError('run_id must be non-empty')
        self.run_id = run_id

        self._config: Optional[BootstrapConfig] = None
        self._registry: Optional[PageRegistry] = None
        self._event_bus: Optional[MemoryEventBus] = None
        self._config_loader: Optional[ConfigLoaderPort] = None
        self._plugin_loader: Optional[PluginLoaderPort] = None
        self._broadcaster_factory: Optional[BroadcasterFactory] = None
        self._file_probe: Optional[FileProbePort] = None
        self._frontmatter_loader: Optional[FrontmatterLoaderPort] = None
        self._schema_builder: Optional[SchemaBuilderPort] = None
        self._query_executor: Optional[QueryExecutorPort] = None
        self._built: bool = False

        logger.debug("BootstrapContextBuilder created for run_id='%s'", self.run_id)

    def with_config(self, config: BootstrapConfig) -> 'BootstrapContextBuilder':
        self._guard_unbuilt('with_config')
        if config is None:
            raise BootstrapContextBuildError('BootstrapConfig cannot be None')
        self._config = config
        return self

    def with_event_bus(self, event_bus: Optional[MemoryEventBus] = None) -> 'BootstrapContextBuilder':
        self._guard_unbuilt('with_event_bus')
        self._event_bus = event_bus
        return self

    def with_page_registry(self, registry: Optional[PageRegistry] = None) -> 'BootstrapContextBuilder':
        self._guard_unbuilt('with_page_registry')
        self._registry = registry
        return self

    def with_collaborators(
        self,
        *,
        config_loader: Optional[ConfigLoaderPort] = None,
        plugin_loader: Optional[PluginLoaderPort] = None,
        broadcaster_factory: Optional[BroadcasterFactory] = None,
        file_probe: Optional[FileProbePort] = None,
        frontmatter_loader: Optional[FrontmatterLoaderPort] = None,
        schema_builder: Optional[SchemaBuilderPort] = None,
        query_executor: Optional[QueryExecutorPort] = None,
    ) -> 'BootstrapContextBuilder':
        self._guard_unbuilt('with_collaborators')
        self._config_loader = config_loader or self._config_loader
        self._plugin_loader = plugin_loader or self._plugin_loader
        self._broadcaster_factory = broadcaster_factory or self._broadcaster_factory
        self._file_probe = file_probe or self._file_probe
        self._frontmatter_loader = frontmatter_loader or self._frontmatter_loader
        self._schema_builder = schema_builder or self._schema_builder
        self._query_executor = query_executor or self._query_executor
        return self

    def build(self) -> BootstrapContext:
        if self._built:
            raise BootstrapContextBuildError('Builder already used – create a new instance')
        if self._config is None:
            raise BootstrapContextBuildError('Missing required components: BootstrapConfig')

        config = self._config
        event_bus = self._event_bus or MemoryEventBus(component_id=f'event_bus_{self.run_id}')
        # A caller-supplied registry keeps whatever bus it was built with.
        registry = self._registry or PageRegistry(event_bus=event_bus)

        context = BootstrapContext(
            config=config,
            run_id=self.run_id,
            page_registry=registry,
            event_bus=event_bus,
            signal_emitter=BootstrapSignalEmitter(event_bus, self.run_id),
            config_loader=self._config_loader or SiteConfigLoader(env=config.env),
            plugin_loader=self._plugin_loader or LocalPluginLoader(config.directory),
            broadcaster_factory=self._broadcaster_factory or PluginApiRunner,
            file_probe=self._file_probe or GlobFileProbe(),
            frontmatter_loader=self._frontmatter_loader or YamlFrontmatterLoader(),
            schema_builder=self._schema_builder,
            query_executor=self._query_executor,
        )
        # Defaults that read the context itself are wired once it exists.
        if context.schema_builder is None:
            context.schema_builder = SiteSchemaBuilder(context)
        if context.query_executor is None:
            context.query_executor = PageQueryRunner(schema_provider=lambda: context.schema)

        self._built = True
        logger.info("BootstrapContext built (run_id='%s', site=%s)", self.run_id, config.directory)
        return context

    def _guard_unbuilt(self, method: str) -> None:
        if self._built:
            raise BootstrapContextBuildError(f'Cannot call {method} after build()')


def create_bootstrap_context(run_id: str, config: BootstrapConfig, **collaborators: Any) -> BootstrapContext:
    event_bus = collaborators.pop('event_bus', None)
    registry = collaborators.pop('page_registry', None)
    return (BootstrapContextBuilder(run_id)
            .with_config(config)
            .with_event_bus(event_bus)
            .with_page_registry(registry)
            .with_collaborators(**collaborators)
            .build())
