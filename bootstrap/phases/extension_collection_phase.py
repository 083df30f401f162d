from __future__ import annotations
from typing import Any, Iterator, List

from core.signals import EXTENSIONS_RESOLVED
from .base_phase import BootstrapPhase, PhaseResult

RESOLVABLE_EXTENSIONS_EVENT = 'resolvableExtensions'


def flatten_extensions(values: Any) -> Iterator[str]:
    """Deep-flatten plugin answers; anything that is not a string is ignored."""
    if isinstance(values, str):
        yield values
    elif isinstance(values, (list, tuple, set, frozenset)):
        for value in values:
            yield from flatten_extensions(value)


class ExtensionCollectionPhase(BootstrapPhase):
    """
    Asks every plugin for extra page extensions and widens the program snapshot.

    Built-in extensions keep their position at the front; plugin
    contributions follow in plugin order.
    """

    PHASE_NAME = 'extension_collection'
    REQUIRES = ('schema_build',)

    async def execute(self, context) -> PhaseResult:
        answers = await context.broadcaster.broadcast(
            RESOLVABLE_EXTENSIONS_EVENT, context.plugin_event_payload()
        )
        contributed: List[str] = list(flatten_extensions(answers))
        context.program = context.program.with_extensions([*context.program.extensions, *contributed])

        extensions = list(context.program.extensions)
        await context.signal_emitter.emit_signal(EXTENSIONS_RESOLVED, {
            'extensions': extensions,
            'message': f'Recognised extensions: {extensions}',
        })
        return PhaseResult.success_result(
            message=f'{len(extensions)} extension(s) recognised',
            metadata={'extensions': extensions, 'contributed': contributed}
        )
