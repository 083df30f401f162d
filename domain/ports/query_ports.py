# domain/ports/query_ports.py
"""
Schema construction and query execution contracts.

The bootstrap never looks inside a schema or a query result. It builds the
schema once, binds ``QueryExecutorPort.run`` for plugins and waits for the
executor to report that its initial backlog has drained.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class SchemaPort(Protocol):
    def execute(self, query: str, context: Dict[str, Any]) -> Any: ...


@runtime_checkable
class SchemaBuilderPort(Protocol):
    def build(self) -> Union[SchemaPort, Awaitable[SchemaPort]]: ...


@runtime_checkable
class QueryExecutorPort(Protocol):
    async def run(self, query: str, context: Optional[Dict[str, Any]] = None) -> Any: ...

    def on_initial_backlog_drained(self, callback: Callable[[], Any]) -> None:
        """Register ``callback`` to fire once the initial page queries are done."""
        ...
