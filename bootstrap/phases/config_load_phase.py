from __future__ import annotations

from core.exceptions import ConfigurationError
from core.signals import CONFIGURATION_LOADED
from .base_phase import BootstrapPhase, FailurePolicy, PhaseResult, maybe_await


class ConfigLoadPhase(BootstrapPhase):
    """Loads the site configuration. A site that cannot be configured cannot be built."""

    PHASE_NAME = 'config_load'
    REQUIRES = ('init',)
    FAILURE_POLICY = FailurePolicy.FATAL
    FAILURE_ERROR = ConfigurationError

    async def execute(self, context) -> PhaseResult:
        root = context.program.directory
        context.site_config = await maybe_await(context.config_loader.load(root))

        plugin_count = len(context.site_config.plugins)
        await context.signal_emitter.emit_signal(CONFIGURATION_LOADED, {
            'plugin_count': plugin_count,
            'message': f'Site configuration loaded from {root}',
        })
        return PhaseResult.success_result(
            message=f'Site configuration loaded ({plugin_count} plugin(s) declared)',
            metadata={'site_metadata_keys': sorted(context.site_config.site_metadata)}
        )
