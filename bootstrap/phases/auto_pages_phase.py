from __future__ import annotations

from bootstrap.config.bootstrap_config import AUTO_PAGES_OVERWRITE
from pages.auto_page_scanner import AutoPageScanner
from .base_phase import BootstrapPhase, PhaseResult


class AutoPageCreationPhase(BootstrapPhase):
    """
    Registers a page for every eligible file in the pages directory.

    Runs after extension collection, so the widened extension set is used,
    and after explicit page creation, so the overwrite policy can see which
    routes plugins registered.
    """

    PHASE_NAME = 'auto_pages'
    REQUIRES = ('explicit_pages',)

    async def execute(self, context) -> PhaseResult:
        config = context.config
        scanner = AutoPageScanner(
            context.file_probe,
            frontmatter_loader=context.frontmatter_loader,
            frontmatter_extensions=config.frontmatter_extensions,
        )
        pages_root = config.pages_directory.resolve().as_posix()
        candidates = scanner.scan(pages_root, context.program.extensions)

        overwrite = config.auto_page_policy == AUTO_PAGES_OVERWRITE
        explicit = set(context.explicit_routes)
        created, kept = [], []
        for page in candidates:
            if page.route_path in explicit and not overwrite:
                kept.append(page.route_path)
                continue
            context.page_registry.upsert(page)
            created.append(page.route_path)

        result = PhaseResult.success_result(
            message=f'{len(created)} page(s) discovered in {pages_root}',
            metadata={'routes': created, 'policy': config.auto_page_policy}
        )
        if kept:
            result.add_warning(f'Kept plugin-created page(s) over discovered file(s): {kept}')
        return result
