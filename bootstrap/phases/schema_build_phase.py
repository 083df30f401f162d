from __future__ import annotations

from core.signals import SCHEMA_BUILT
from .base_phase import BootstrapPhase, PhaseResult, maybe_await


class SchemaBuildPhase(BootstrapPhase):
    PHASE_NAME = 'schema_build'
    REQUIRES = ('runtime_modules',)

    async def execute(self, context) -> PhaseResult:
        context.schema = await maybe_await(context.schema_builder.build())
        await context.signal_emitter.emit_signal(SCHEMA_BUILT, {
            'schema_type': type(context.schema).__name__,
            'message': 'Schema built',
        })
        return PhaseResult.success_result(message=f'Schema built ({type(context.schema).__name__})')
