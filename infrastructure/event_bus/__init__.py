# infrastructure/event_bus/__init__.py
from .memory_event_bus import MemoryEventBus

__all__ = ["MemoryEventBus"]
