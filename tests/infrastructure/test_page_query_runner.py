import asyncio
from unittest.mock import MagicMock

import pytest

from core.exceptions import QueryExecutionError
from core.registry.page_registry import PageRegistry
from core.signals import PAGE_CREATION_COMPLETE
from infrastructure.event_bus.memory_event_bus import MemoryEventBus
from infrastructure.query.page_query_runner import PageQueryRunner
from infrastructure.schema.site_schema import QueryResult, SiteSchema


class SlowSchema:
    def __init__(self):
        self.release = asyncio.Event()
        self.calls = []

    async def execute(self, query, context):
        self.calls.append((query, context))
        await self.release.wait()
        return QueryResult(data=context['path'])


@pytest.mark.asyncio
async def test_run_without_schema_fails():
    runner = PageQueryRunner(schema_provider=lambda: None)
    with pytest.raises(QueryExecutionError):
        await runner.run('site')


@pytest.mark.asyncio
async def test_run_delegates_to_schema():
    schema = SiteSchema({'site': lambda args: {'title': 'T'}})
    runner = PageQueryRunner(schema_provider=lambda: schema)
    result = await runner.run('site.title')
    assert result.data == 'T'


@pytest.mark.asyncio
async def test_drains_only_after_page_creation_and_pending_queries():
    schema = SlowSchema()
    bus = MemoryEventBus()
    runner = PageQueryRunner(schema_provider=lambda: schema)
    runner.watch(bus)
    registry = PageRegistry(event_bus=bus)
    drained = MagicMock()
    runner.on_initial_backlog_drained(drained)

    registry.upsert({'path': '/a/', 'component': '/a.js', 'query': 'site_page'})
    registry.upsert({'path': '/b/', 'component': '/b.js'})
    assert runner.pending_count == 1

    bus.publish(PAGE_CREATION_COMPLETE, {})
    await asyncio.sleep(0)
    drained.assert_not_called()

    schema.release.set()
    for _ in range(5):
        await asyncio.sleep(0)
    drained.assert_called_once()
    assert runner.is_initial_backlog_drained
    assert runner.results['/a/'].data == '/a/'
    assert schema.calls[0][1]['path'] == '/a/'


@pytest.mark.asyncio
async def test_empty_backlog_drains_on_page_creation_complete():
    bus = MemoryEventBus()
    runner = PageQueryRunner(schema_provider=lambda: None)
    runner.watch(bus)
    drained = MagicMock()
    runner.on_initial_backlog_drained(drained)
    bus.publish(PAGE_CREATION_COMPLETE, {})
    drained.assert_called_once()

    late = MagicMock()
    runner.on_initial_backlog_drained(late)
    late.assert_called_once()


@pytest.mark.asyncio
async def test_failed_page_query_is_recorded(caplog):
    bus = MemoryEventBus()
    runner = PageQueryRunner(schema_provider=lambda: None)
    runner.watch(bus)
    PageRegistry(event_bus=bus).upsert({'path': '/a/', 'component': '/a.js', 'query': 'site'})
    bus.publish(PAGE_CREATION_COMPLETE, {})
    for _ in range(5):
        await asyncio.sleep(0)
    assert isinstance(runner.failures['/a/'], QueryExecutionError)
    assert runner.is_initial_backlog_drained
    assert 'Page query' in caplog.text
