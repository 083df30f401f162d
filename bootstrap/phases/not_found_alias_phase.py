from __future__ import annotations

from .base_phase import BootstrapPhase, PhaseResult

NOT_FOUND_ROUTE = '/404/'
NOT_FOUND_HTML_ROUTE = '/404.html'


class NotFoundAliasPhase(BootstrapPhase):
    """Adds a ``/404.html`` copy of the ``/404/`` page when none is registered."""

    PHASE_NAME = 'not_found_alias'
    REQUIRES = ('auto_pages',)

    async def execute(self, context) -> PhaseResult:
        registry = context.page_registry
        if NOT_FOUND_HTML_ROUTE in registry:
            return PhaseResult.success_result(message=f'{NOT_FOUND_HTML_ROUTE} already registered')

        not_found = registry.get(NOT_FOUND_ROUTE)
        if not_found is None:
            return PhaseResult.success_result(message=f'No {NOT_FOUND_ROUTE} page to alias')

        registry.upsert(not_found.with_route(NOT_FOUND_HTML_ROUTE))
        return PhaseResult.success_result(
            message=f'Aliased {NOT_FOUND_ROUTE} at {NOT_FOUND_HTML_ROUTE}',
            metadata={'component': not_found.component_path}
        )
