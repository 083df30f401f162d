# bootstrap/__init__.py
from __future__ import annotations

from .exceptions import *
from .core.orchestrator import BootstrapOrchestrator, bootstrap, bootstrap_sync, default_phases
from .core.phase_executor import BootstrapPhaseExecutor, PhaseExecutionResult, PhaseExecutionSummary
from .core.phase_graph import PhaseGraph
from .context.bootstrap_context_builder import BootstrapContextBuilder, create_bootstrap_context
from .context.bootstrap_context import BootstrapContext, PageActions
from .config.bootstrap_config import BootstrapConfig
from .config.config_loader import SiteConfigLoader
from .result_builder import BootstrapResult, BootstrapResultBuilder

__version__ = '0.1.0'
__description__ = 'Site bootstrap: config, plugins, runtime modules and page creation'

__all__ = [
    'bootstrap', 'bootstrap_sync', 'default_phases',
    'BootstrapConfig', 'SiteConfigLoader',
    'BootstrapContext', 'BootstrapContextBuilder', 'create_bootstrap_context', 'PageActions',
    'BootstrapOrchestrator',
    'BootstrapPhaseExecutor', 'PhaseExecutionResult', 'PhaseExecutionSummary', 'PhaseGraph',
    'BootstrapResult', 'BootstrapResultBuilder',
    '__version__', '__description__',
    'BootstrapError', 'FatalBootstrapError', 'ConfigurationError', 'PluginLoadError', 'ScaffoldError',
    'PhaseOrderError', 'RuntimeTemplateError', 'BootstrapContextBuildError', 'BootstrapTimeoutError',
    'QueryExecutionError',
]
