from __future__ import annotations

from core.signals import PAGE_CREATION_COMPLETE, QUERY_BACKLOG_DRAINED
from .base_phase import BootstrapPhase, PhaseResult

GENERATE_SIDE_EFFECTS_EVENT = 'generateSideEffects'


class QueryDrainPhase(BootstrapPhase):
    """
    Waits for the initial page-query backlog, then runs ``generateSideEffects``.

    The bootstrap only completes once both have happened.
    """

    PHASE_NAME = 'query_drain'
    REQUIRES = ('not_found_alias',)

    async def execute(self, context) -> PhaseResult:
        page_count = len(context.page_registry)
        await context.signal_emitter.emit_signal(PAGE_CREATION_COMPLETE, {
            'page_count': page_count,
            'message': f'Page creation complete ({page_count} page(s))',
        })

        self.logger.info('Waiting for initial page queries to finish')
        await context.drain_event.wait()
        await context.signal_emitter.emit_signal(QUERY_BACKLOG_DRAINED, {'message': 'Initial page queries drained'})

        await context.broadcaster.broadcast(GENERATE_SIDE_EFFECTS_EVENT, context.plugin_event_payload())
        return PhaseResult.success_result(message='Query backlog drained and side effects generated',
                                          metadata={'page_count': page_count})
