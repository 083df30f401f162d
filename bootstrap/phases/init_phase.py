from __future__ import annotations
import asyncio

from core.signals import PROGRAM_CONFIGURED
from domain.program import Program
from .base_phase import BootstrapPhase, PhaseResult


class InitPhase(BootstrapPhase):
    """
    Records the program snapshot on the context and arms the drain watcher.

    The watcher is armed here, at the very start, so no backlog-drained
    notification can be missed; it is only awaited in ``QueryDrainPhase``.
    """

    PHASE_NAME = 'init'

    async def execute(self, context) -> PhaseResult:
        config = context.config
        context.program = Program(directory=config.directory, extensions=config.extensions)

        loop = asyncio.get_running_loop()
        drain_event = asyncio.Event()
        context.drain_event = drain_event
        # The executor may report from another thread.
        context.query_executor.on_initial_backlog_drained(lambda: loop.call_soon_threadsafe(drain_event.set))

        watch = getattr(context.query_executor, 'watch', None)
        if callable(watch):
            watch(context.event_bus)

        await context.signal_emitter.emit_signal(PROGRAM_CONFIGURED, {
            'directory': context.program.directory,
            'extensions': list(context.program.extensions),
            'message': f'Program configured for {context.program.directory}',
        })
        return PhaseResult.success_result(
            message=f'Program configured for {context.program.directory}',
            metadata={'extensions': list(context.program.extensions)}
        )
