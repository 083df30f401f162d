"""
Bootstrap result for the site bootstrap.

Built from the context once every phase has run; the handle the rest of the
build uses to query data and read the registered pages.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from domain.pages import Page

logger = logging.getLogger(__name__)


class BootstrapResult:
    """
    Result of a completed site bootstrap.

    ``run_query`` is the query function bound to the schema built during the
    run; downstream build steps use it exactly as plugins did.
    """

    def __init__(self, context, run_id: str, bootstrap_duration: Optional[float] = None, phase_summary=None):
        self._context = context
        self.run_id = run_id
        self.bootstrap_duration = bootstrap_duration
        self.phase_summary = phase_summary
        self.creation_time = datetime.now(timezone.utc)

        logger.info(f"BootstrapResult created for run_id: {run_id}")

    @property
    def success(self) -> bool:
        """True when every phase completed; best-effort failures leave it False."""
        if self.phase_summary is None:
            return True
        return self.phase_summary.failed_phases == 0

    async def run_query(self, query: str, context: Optional[Dict[str, Any]] = None) -> Any:
        return await self._context.run_query(query, context)

    @property
    def page_registry(self):
        return self._context.page_registry

    @property
    def pages(self) -> Tuple[Page, ...]:
        return self._context.page_registry.list()

    @property
    def page_count(self) -> int:
        return len(self._context.page_registry)

    @property
    def program(self):
        return self._context.program

    @property
    def site_config(self):
        return self._context.site_config

    @property
    def plugins(self) -> List[Any]:
        return list(self._context.plugins)

    @property
    def runtime_modules(self) -> Dict[str, str]:
        return dict(self._context.runtime_modules)

    @property
    def event_bus(self):
        return self._context.event_bus

    @property
    def degraded_phases(self) -> List[str]:
        return self.phase_summary.degraded_phases if self.phase_summary else []

    def get_summary(self) -> Dict[str, Any]:
        return {
            'run_id': self.run_id,
            'success': self.success,
            'page_count': self.page_count,
            'routes': self._context.page_registry.routes(),
            'plugins': [plugin.name for plugin in self._context.plugins],
            'extensions': list(self.program.extensions) if self.program else [],
            'degraded_phases': self.degraded_phases,
            'bootstrap_duration': self.bootstrap_duration,
            'creation_time': self.creation_time.isoformat(),
        }

    def __repr__(self) -> str:
        return f'BootstrapResult(run_id={self.run_id!r}, pages={self.page_count}, success={self.success})'


class BootstrapResultBuilder:
    def __init__(self, context):
        self.context = context
        self._duration: Optional[float] = None
        self._summary = None

    def with_duration(self, duration_seconds: float) -> 'BootstrapResultBuilder':
        self._duration = duration_seconds
        return self

    def with_phase_summary(self, summary) -> 'BootstrapResultBuilder':
        self._summary = summary
        return self

    def build(self) -> BootstrapResult:
        return BootstrapResult(
            context=self.context,
            run_id=self.context.run_id,
            bootstrap_duration=self._duration,
            phase_summary=self._summary,
        )
