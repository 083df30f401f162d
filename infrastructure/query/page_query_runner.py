# infrastructure/query/page_query_runner.py
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Set

from core.exceptions import QueryExecutionError
from core.signals import PAGE_CREATION_COMPLETE, PAGE_UPSERTED
from domain.pages import Page

logger = logging.getLogger(__name__)

QUERY_KEY = 'query'


class PageQueryRunner:
    """
    Runs queries against the current schema and executes page queries.

    Pages whose metadata carries a ``query`` are queued as they are upserted.
    The initial backlog counts as drained once page creation has been
    announced and no page query is still in flight; callbacks registered
    through ``on_initial_backlog_drained`` fire exactly once at that point
    (immediately, if it has already happened).
    """

    def __init__(self, schema_provider: Callable[[], Any]):
        self._schema_provider = schema_provider
        self._pending: Set[asyncio.Task] = set()
        self._drain_callbacks: List[Callable[[], Any]] = []
        self._page_creation_complete = False
        self._initial_drained = False
        self.results: Dict[str, Any] = {}
        self.failures: Dict[str, BaseException] = {}

    def watch(self, event_bus: Any) -> None:
        event_bus.subscribe(PAGE_UPSERTED, self._on_page_upserted)
        event_bus.subscribe(PAGE_CREATION_COMPLETE, self._on_page_creation_complete)
        logger.debug('PageQueryRunner watching page updates')

    async def run(self, query: str, context: Optional[Dict[str, Any]] = None) -> Any:
        schema = self._schema_provider()
        if schema is None:
            raise QueryExecutionError('Query run before the schema was built', subject=query)
        result = schema.execute(query, context or {})
        if inspect.isawaitable(result):
            result = await result
        return result

    def on_initial_backlog_drained(self, callback: Callable[[], Any]) -> None:
        if self._initial_drained:
            callback()
            return
        self._drain_callbacks.append(callback)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def is_initial_backlog_drained(self) -> bool:
        return self._initial_drained

    def enqueue(self, page: Page) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._run_page_query(page))
        self._pending.add(task)
        task.add_done_callback(self._on_query_done)
        logger.debug(f"Queued page query for '{page.route_path}' ({len(self._pending)} pending)")
        return task

    async def _run_page_query(self, page: Page) -> None:
        context = {'path': page.route_path, **dict(page.metadata.get('context') or {})}
        try:
            self.results[page.route_path] = await self.run(page.metadata[QUERY_KEY], context)
        except Exception as e:
            # The query belongs to a page, not to the caller that queued it.
            logger.error(f"Page query for '{page.route_path}' failed: {e}", exc_info=True)
            self.failures[page.route_path] = e

    def _on_query_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        self._check_drained()

    def _on_page_upserted(self, payload: Dict[str, Any]) -> None:
        page = payload.get('page')
        if page is not None and page.metadata.get(QUERY_KEY):
            self.enqueue(page)

    def _on_page_creation_complete(self, _payload: Any) -> None:
        self._page_creation_complete = True
        self._check_drained()

    def _check_drained(self) -> None:
        if self._initial_drained or not self._page_creation_complete or self._pending:
            return
        self._initial_drained = True
        logger.info(f'Initial page queries done ({len(self.results)} ok, {len(self.failures)} failed)')
        callbacks, self._drain_callbacks = self._drain_callbacks, []
        for callback in callbacks:
            callback()
