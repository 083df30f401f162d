from __future__ import annotations

from core.exceptions import PluginLoadError
from core.signals import PLUGINS_LOADED
from .base_phase import BootstrapPhase, FailurePolicy, PhaseResult, maybe_await


class PluginLoadPhase(BootstrapPhase):
    """Resolves and flattens the declared plugins, then builds the event broadcaster."""

    PHASE_NAME = 'plugin_load'
    REQUIRES = ('config_load',)
    FAILURE_POLICY = FailurePolicy.FATAL
    FAILURE_ERROR = PluginLoadError

    async def execute(self, context) -> PhaseResult:
        plugins = await maybe_await(context.plugin_loader.load(context.site_config))
        context.plugins = list(plugins)
        context.broadcaster = context.broadcaster_factory(context.plugins)

        names = [plugin.name for plugin in context.plugins]
        self.logger.debug(f'Plugin order: {names}')
        await context.signal_emitter.emit_signal(PLUGINS_LOADED, {
            'plugins': names,
            'message': f'{len(names)} plugin(s) loaded',
        })
        return PhaseResult.success_result(message=f'{len(names)} plugin(s) loaded', metadata={'plugins': names})
