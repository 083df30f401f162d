import threading

import pytest

from core.registry.page_registry import PageRegistry
from core.signals import PAGE_UPSERTED
from domain.pages import Page
from infrastructure.event_bus.memory_event_bus import MemoryEventBus


def make_page(route='/about/', component='/site/src/pages/about.js', **metadata):
    return Page(component_path=component, route_path=route, metadata=metadata)


def test_upsert_is_idempotent():
    registry = PageRegistry()
    page = make_page(title='About')
    registry.upsert(page)
    registry.upsert(page)
    assert len(registry) == 1
    assert registry.get('/about/') == page


def test_upsert_replaces_whole_record_in_place():
    registry = PageRegistry()
    registry.upsert(make_page('/a/', title='A'))
    registry.upsert(make_page('/b/'))
    registry.upsert(make_page('/a/', component='/other.js'))

    assert registry.routes() == ['/a/', '/b/']
    replaced = registry.get('/a/')
    assert replaced.component_path == '/other.js'
    assert replaced.metadata == {}


def test_upsert_accepts_plugin_mappings():
    registry = PageRegistry()
    stored = registry.upsert({'path': '/x/', 'component': '/x.js', 'context': {'id': 1}})
    assert stored.route_path == '/x/'
    assert stored.metadata == {'context': {'id': 1}}


def test_stored_page_is_isolated_from_caller_mutation():
    registry = PageRegistry()
    context = {'id': 1}
    registry.upsert({'path': '/x/', 'component': '/x.js', 'context': context})
    context['id'] = 2
    assert registry.get('/x/').metadata['context'] == {'id': 1}


def test_list_is_a_snapshot():
    registry = PageRegistry()
    registry.upsert(make_page('/a/'))
    snapshot = registry.list()
    registry.upsert(make_page('/b/'))
    assert isinstance(snapshot, tuple)
    assert [p.route_path for p in snapshot] == ['/a/']


def test_find():
    registry = PageRegistry()
    registry.upsert(make_page('/a/', kind='post'))
    registry.upsert(make_page('/b/', kind='post'))
    assert registry.find(lambda p: p.metadata.get('kind') == 'post').route_path == '/a/'
    assert registry.find(lambda p: p.route_path == '/zzz/') is None
    assert len(registry.find_all(lambda p: p.metadata.get('kind') == 'post')) == 2


def test_publishes_upserts():
    bus = MemoryEventBus()
    seen = []
    bus.subscribe(PAGE_UPSERTED, seen.append)
    registry = PageRegistry(event_bus=bus)
    registry.upsert(make_page('/a/'))
    registry.upsert(make_page('/a/'))
    assert [event['replaced'] for event in seen] == [False, True]
    assert seen[0]['page'].route_path == '/a/'


def test_pages_are_frozen():
    page = make_page()
    with pytest.raises(Exception):
        page.route_path = '/other/'


def test_concurrent_readers_see_whole_records():
    registry = PageRegistry()
    errors = []

    def writer():
        for i in range(200):
            registry.upsert(make_page(f'/p{i % 10}/', component=f'/c{i}.js', n=i))

    def reader():
        for _ in range(200):
            for page in registry.list():
                if page.component_path != f"/c{page.metadata['n']}.js":
                    errors.append(page)

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert not errors
    assert len(registry) == 10


def test_reads_cannot_patch_a_stored_page():
    registry = PageRegistry()
    stored = registry.upsert({'path': '/x/', 'component': '/x.js', 'context': {'id': 1}})
    stored.metadata['context']['id'] = 2
    registry.get('/x/').metadata['extra'] = True
    registry.list()[0].metadata['context']['id'] = 3
    registry.find(lambda p: True).metadata.clear()

    assert registry.get('/x/').metadata == {'context': {'id': 1}}
