# bootstrap/phases/__init__.py
from .base_phase import BootstrapPhase, FailurePolicy, PhaseResult
from .init_phase import InitPhase
from .config_load_phase import ConfigLoadPhase
from .plugin_load_phase import PluginLoadPhase
from .scaffold_phase import ScaffoldPhase
from .runtime_module_phase import RuntimeModulePhase
from .schema_build_phase import SchemaBuildPhase
from .extension_collection_phase import ExtensionCollectionPhase
from .explicit_pages_phase import ExplicitPageCreationPhase
from .auto_pages_phase import AutoPageCreationPhase
from .not_found_alias_phase import NotFoundAliasPhase
from .query_drain_phase import QueryDrainPhase

__all__ = [
    'BootstrapPhase', 'FailurePolicy', 'PhaseResult',
    'InitPhase', 'ConfigLoadPhase', 'PluginLoadPhase', 'ScaffoldPhase', 'RuntimeModulePhase',
    'SchemaBuildPhase', 'ExtensionCollectionPhase', 'ExplicitPageCreationPhase', 'AutoPageCreationPhase',
    'NotFoundAliasPhase', 'QueryDrainPhase',
]
