from __future__ import annotations
from pathlib import Path
from typing import Dict

from core.signals import RUNTIME_MODULE_WRITTEN
from plugins.hook_collector import BROWSER_HOOK, SSR_HOOK, collect_hooks
from plugins.runtime_module import RUNTIME_MODULE_FILES, generate_runtime_module
from .base_phase import BootstrapPhase, PhaseResult
from .scaffold_phase import PACKAGED_CACHE_DIR

HOOK_KINDS = (BROWSER_HOOK, SSR_HOOK)


class RuntimeModulePhase(BootstrapPhase):
    """Collects browser and SSR hooks and writes both runtime modules into the cache."""

    PHASE_NAME = 'runtime_modules'
    REQUIRES = ('scaffold',)

    async def execute(self, context) -> PhaseResult:
        cache_dir = context.config.cache_directory
        cache_dir.mkdir(parents=True, exist_ok=True)

        hook_counts: Dict[str, int] = {}
        for hook_kind in HOOK_KINDS:
            file_name = RUNTIME_MODULE_FILES[hook_kind]
            hooks = collect_hooks(hook_kind, context.plugins, context.file_probe)
            source = generate_runtime_module(self._base_source(cache_dir, file_name), hooks)

            target = cache_dir / file_name
            target.write_text(source, encoding='utf-8')
            context.runtime_modules[hook_kind] = source
            hook_counts[hook_kind] = len(hooks)

            self.logger.info(f'Wrote {target} with {len(hooks)} {hook_kind} hook(s)')
            await context.signal_emitter.emit_signal(RUNTIME_MODULE_WRITTEN, {
                'hook_kind': hook_kind,
                'path': target.as_posix(),
                'hook_count': len(hooks),
                'message': f'Runtime module {file_name} written',
            })

        return PhaseResult.success_result(message='Runtime modules generated', metadata={'hooks': hook_counts})

    def _base_source(self, cache_dir: Path, file_name: str) -> str:
        template = cache_dir / file_name
        if not template.is_file():
            # Scaffolding is best effort; the packaged template is always there.
            self.logger.warning(f'{template} missing, using packaged template')
            template = PACKAGED_CACHE_DIR / file_name
        return template.read_text(encoding='utf-8')
