from __future__ import annotations
import asyncio
import shutil
from pathlib import Path

from core.exceptions import ScaffoldError
from .base_phase import BootstrapPhase, FailurePolicy, PhaseResult

# Base runtime-module templates shipped with the package.
PACKAGED_CACHE_DIR = Path(__file__).resolve().parent.parent / 'cache_dir'

JSON_DIR = 'json'


class ScaffoldPhase(BootstrapPhase):
    """
    Creates the output directories and copies the runtime templates into the cache.

    Best effort: a failure here is logged and the bootstrap carries on.
    """

    PHASE_NAME = 'scaffold'
    REQUIRES = ('plugin_load',)
    FAILURE_POLICY = FailurePolicy.BEST_EFFORT
    FAILURE_ERROR = ScaffoldError

    async def execute(self, context) -> PhaseResult:
        config = context.config
        try:
            await asyncio.to_thread(self._scaffold, config.public_directory, config.cache_directory)
        except OSError as e:
            raise ScaffoldError(f'Could not prepare site directories: {e}', path=getattr(e, 'filename', None)) from e

        return PhaseResult.success_result(
            message=f'Scaffolded {config.public_directory} and {config.cache_directory}',
            metadata={'templates': sorted(p.name for p in PACKAGED_CACHE_DIR.iterdir() if p.is_file())}
        )

    def _scaffold(self, public_dir: Path, cache_dir: Path) -> None:
        public_dir.mkdir(parents=True, exist_ok=True)
        shutil.copytree(PACKAGED_CACHE_DIR, cache_dir, dirs_exist_ok=True)
        (cache_dir / JSON_DIR).mkdir(parents=True, exist_ok=True)
        self.logger.debug(f'Copied {PACKAGED_CACHE_DIR} -> {cache_dir}')
