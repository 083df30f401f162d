import pytest

from infrastructure.event_bus.memory_event_bus import MemoryEventBus


def test_sync_handlers_run_inline_in_order():
    bus = MemoryEventBus()
    seen = []
    bus.subscribe('X', lambda payload: seen.append(('first', payload)))
    bus.subscribe('X', lambda payload: seen.append(('second', payload)))
    bus.publish('X', 1)
    assert seen == [('first', 1), ('second', 1)]


def test_unsubscribe_and_history():
    bus = MemoryEventBus(max_history=2)
    seen = []
    bus.subscribe('X', seen.append)
    bus.unsubscribe('X', seen.append)
    bus.unsubscribe('missing', seen.append)
    for name in ('A', 'B', 'C'):
        bus.publish(name)
    assert seen == []
    assert bus.signal_names() == ['B', 'C']


@pytest.mark.asyncio
async def test_async_handlers_are_scheduled_and_drained(caplog):
    bus = MemoryEventBus()
    seen = []

    async def handler(payload):
        seen.append(payload)

    async def failing(payload):
        raise RuntimeError('handler broke')

    bus.subscribe('X', handler)
    bus.subscribe('X', failing)
    bus.publish('X', 'hello')
    assert seen == []
    await bus.drain()
    assert seen == ['hello']
    assert 'handler broke' in caplog.text
    assert bus.get_stats()['pending_handlers'] == 0
