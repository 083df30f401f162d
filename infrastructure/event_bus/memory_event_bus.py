# infrastructure/event_bus/memory_event_bus.py
from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, Dict, List, Set

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _RecordedEvent:
    ts: float
    signal_name: str
    payload: Any


class MemoryEventBus:
    """
    In-process publish/subscribe used for bootstrap signals and page updates.

    Plain handlers run inline, in subscription order, before ``publish``
    returns. Coroutine handlers are scheduled on the running loop.
    """

    def __init__(self, component_id: str = "event_bus_memory", max_history: int = 1000) -> None:
        self.component_id = component_id
        self._subs: Dict[str, List[Callable[[Any], Any | Coroutine]]] = defaultdict(list)
        self._max_history = max_history
        self._history: List[_RecordedEvent] = []
        self._pending: Set[asyncio.Task] = set()
        logger.debug("[%s] constructed (max_history=%s)", self.component_id, self._max_history)

    def subscribe(self, signal_name: str, handler: Callable[[Any], Any]) -> None:
        self._subs[signal_name].append(handler)
        logger.debug(
            '[%s] subscribed to "%s" (%d subscriber(s))',
            self.component_id,
            signal_name,
            len(self._subs[signal_name]),
        )

    def unsubscribe(self, signal_name: str, handler: Callable[[Any], Any]) -> None:
        try:
            self._subs[signal_name].remove(handler)
            logger.debug("[%s] unsubscribed %s -> %s", self.component_id, signal_name, handler)
        except (KeyError, ValueError):
            pass

    def publish(self, signal_name: str, payload: Any | None = None) -> None:
        self._record(signal_name, payload)
        handlers = tuple(self._subs.get(signal_name, ()))
        if not handlers:
            return

        logger.debug('[%s] publishing "%s" to %d subscriber(s)', self.component_id, signal_name, len(handlers))
        for handler in handlers:
            if inspect.iscoroutinefunction(handler):
                self._schedule(signal_name, handler(payload))
            else:
                handler(payload)

    def _schedule(self, signal_name: str, coro: Coroutine) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return
        task = loop.create_task(coro, name=f"{self.component_id}:{signal_name}")
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "[%s] async handler %s failed: %s",
                self.component_id,
                task.get_name(),
                task.exception(),
                exc_info=task.exception(),
            )

    async def drain(self) -> None:
        """Wait for every scheduled coroutine handler to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _record(self, signal_name: str, payload: Any) -> None:
        self._history.append(_RecordedEvent(time.time(), signal_name, payload))
        if len(self._history) > self._max_history:
            self._history.pop(0)

    def history(self) -> List[_RecordedEvent]:
        return list(self._history)

    def signal_names(self) -> List[str]:
        return [event.signal_name for event in self._history]

    def get_stats(self) -> Dict[str, Any]:
        return {
            'subscribers': {k: len(v) for k, v in self._subs.items()},
            'history_size': len(self._history),
            'pending_handlers': len(self._pending),
        }
