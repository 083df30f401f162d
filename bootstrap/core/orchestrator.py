"""
Site bootstrap orchestrator.

Builds the context, runs the phase sequence and hands back a
``BootstrapResult`` once the initial page queries have drained and the
``generateSideEffects`` broadcast has finished.
"""

from __future__ import annotations
import asyncio
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Union

from core.exceptions import BootstrapTimeoutError

from bootstrap.config.bootstrap_config import BootstrapConfig
from bootstrap.context.bootstrap_context import BootstrapContext
from bootstrap.context.bootstrap_context_builder import create_bootstrap_context
from bootstrap.core.phase_executor import BootstrapPhaseExecutor
from bootstrap.phases.auto_pages_phase import AutoPageCreationPhase
from bootstrap.phases.base_phase import BootstrapPhase
from bootstrap.phases.config_load_phase import ConfigLoadPhase
from bootstrap.phases.explicit_pages_phase import ExplicitPageCreationPhase
from bootstrap.phases.extension_collection_phase import ExtensionCollectionPhase
from bootstrap.phases.init_phase import InitPhase
from bootstrap.phases.not_found_alias_phase import NotFoundAliasPhase
from bootstrap.phases.plugin_load_phase import PluginLoadPhase
from bootstrap.phases.query_drain_phase import QueryDrainPhase
from bootstrap.phases.runtime_module_phase import RuntimeModulePhase
from bootstrap.phases.scaffold_phase import ScaffoldPhase
from bootstrap.phases.schema_build_phase import SchemaBuildPhase
from bootstrap.result_builder import BootstrapResult, BootstrapResultBuilder

logger = logging.getLogger(__name__)


def default_phases() -> List[BootstrapPhase]:
    return [
        InitPhase(),
        ConfigLoadPhase(),
        PluginLoadPhase(),
        ScaffoldPhase(),
        RuntimeModulePhase(),
        SchemaBuildPhase(),
        ExtensionCollectionPhase(),
        ExplicitPageCreationPhase(),
        AutoPageCreationPhase(),
        NotFoundAliasPhase(),
        QueryDrainPhase(),
    ]


class BootstrapOrchestrator:
    """
    Runs one site bootstrap.

    Collaborators passed as keyword arguments (``config_loader``,
    ``plugin_loader``, ``broadcaster_factory``, ``file_probe``,
    ``frontmatter_loader``, ``schema_builder``, ``query_executor``,
    ``event_bus``, ``page_registry``) replace the defaults.
    """

    def __init__(self, config: BootstrapConfig, phases: Optional[List[BootstrapPhase]] = None, **collaborators: Any):
        self.config = config
        self.collaborators = collaborators
        self.run_id = self._generate_run_id()
        self.start_time: Optional[datetime] = None
        self.context: Optional[BootstrapContext] = None
        self._phases = phases
        logger.info(f'BootstrapOrchestrator initialized - run_id: {self.run_id}')

    async def execute_bootstrap(self) -> BootstrapResult:
        self.start_time = datetime.now(timezone.utc)
        logger.info('=== Site Bootstrap Starting ===')
        logger.info(f'Run ID: {self.run_id}')
        logger.info(f'Site directory: {self.config.directory}')
        logger.info(f"Environment: {self.config.env or 'default'}")

        timeout = self.config.timeout_seconds
        if timeout is None:
            return await self._execute_bootstrap_process()
        try:
            return await asyncio.wait_for(self._execute_bootstrap_process(), timeout=timeout)
        except asyncio.TimeoutError:
            error_msg = f'Bootstrap timed out after {timeout}s'
            logger.error(error_msg)
            raise BootstrapTimeoutError(error_msg)

    async def _execute_bootstrap_process(self) -> BootstrapResult:
        context = create_bootstrap_context(self.run_id, self.config, **self.collaborators)
        self.context = context
        await context.signal_emitter.emit_bootstrap_started()

        executor = BootstrapPhaseExecutor(context)
        summary = await executor.execute_phases(self._get_phases())

        duration_seconds = self._get_elapsed_seconds()
        await context.signal_emitter.emit_bootstrap_completed(len(context.page_registry), duration_seconds)
        await context.event_bus.drain()

        result = BootstrapResultBuilder(context).with_duration(duration_seconds).with_phase_summary(summary).build()
        if result.success:
            logger.info(f'✓ Site Bootstrap Complete. Run ID: {result.run_id}. Pages: {result.page_count}, '
                        f'Duration: {duration_seconds:.2f}s')
        else:
            logger.warning(f'✓ Site Bootstrap Complete with degraded phases {result.degraded_phases}. '
                           f'Run ID: {result.run_id}. Pages: {result.page_count}')
        return result

    def _get_phases(self) -> List[BootstrapPhase]:
        if self._phases is None:
            self._phases = default_phases()
        return self._phases

    def _generate_run_id(self) -> str:
        timestamp = datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')
        process_id = os.getpid()
        return f'bootstrap_run_{timestamp}_{process_id}'

    def _get_elapsed_seconds(self) -> float:
        if self.start_time is None:
            return 0.0
        return (datetime.now(timezone.utc) - self.start_time).total_seconds()


def _as_config(directory_or_config: Union[str, Path, BootstrapConfig], config_kwargs: dict) -> BootstrapConfig:
    if isinstance(directory_or_config, BootstrapConfig):
        return directory_or_config
    return BootstrapConfig.from_params(directory_or_config, **config_kwargs)


_CONFIG_PARAMS = {
    'env', 'extensions', 'frontmatter_extensions', 'pages_dir', 'auto_page_policy', 'exit_on_fatal', 'timeout_seconds',
}


async def bootstrap(directory_or_config: Union[str, Path, BootstrapConfig], **kwargs: Any) -> BootstrapResult:
    """Bootstrap the site in ``directory_or_config``; extra keywords configure the run or replace collaborators."""
    config_kwargs = {k: v for k, v in kwargs.items() if k in _CONFIG_PARAMS}
    collaborators = {k: v for k, v in kwargs.items() if k not in _CONFIG_PARAMS}
    orchestrator = BootstrapOrchestrator(_as_config(directory_or_config, config_kwargs), **collaborators)
    return await orchestrator.execute_bootstrap()


def bootstrap_sync(directory_or_config: Union[str, Path, BootstrapConfig], **kwargs: Any) -> BootstrapResult:
    logger.debug('Running site bootstrap in synchronous mode')
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(bootstrap(directory_or_config, **kwargs))
    finally:
        loop.close()
