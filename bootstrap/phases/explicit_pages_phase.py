from __future__ import annotations

from core.signals import PAGE_UPSERTED
from .base_phase import BootstrapPhase, PhaseResult

CREATE_PAGES_EVENT = 'createPages'


class ExplicitPageCreationPhase(BootstrapPhase):
    """
    Broadcasts ``createPages`` with the bound query function.

    Plugins register pages through ``actions.upsert_page``. The routes they
    write are remembered so auto-discovery can respect them.
    """

    PHASE_NAME = 'explicit_pages'
    REQUIRES = ('extension_collection',)

    async def execute(self, context) -> PhaseResult:
        written = []
        before = context.page_registry.routes()

        def record(payload):
            written.append(payload['page'].route_path)

        context.event_bus.subscribe(PAGE_UPSERTED, record)
        try:
            await context.broadcaster.broadcast(
                CREATE_PAGES_EVENT, context.plugin_event_payload(graphql=context.run_query)
            )
        finally:
            context.event_bus.unsubscribe(PAGE_UPSERTED, record)

        # A registry wired to another bus still shows its new routes.
        added = [route for route in context.page_registry.routes() if route not in before]
        context.explicit_routes = list(dict.fromkeys([*written, *added]))
        return PhaseResult.success_result(
            message=f'{len(context.explicit_routes)} page(s) created by plugins',
            metadata={'routes': list(context.explicit_routes)}
        )
