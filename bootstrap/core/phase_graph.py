"""Phase dependency graph using graphlib."""

from __future__ import annotations

from graphlib import CycleError, TopologicalSorter
from typing import Dict, Iterable, List, Sequence, Set

from core.exceptions import PhaseOrderError

from bootstrap.phases.base_phase import BootstrapPhase


class PhaseGraph:
    """
    Dependency graph over bootstrap phases.

    The phases run in their declared order; the graph makes sure that order
    honours every ``REQUIRES`` edge before anything runs.
    """

    def __init__(self, phases: Sequence[BootstrapPhase]) -> None:
        self._order: List[str] = []
        self._graph: Dict[str, Set[str]] = {}
        for phase in phases:
            self.add_phase(phase.phase_name, phase.REQUIRES)

    def add_phase(self, name: str, requires: Iterable[str] = ()) -> None:
        if name in self._graph:
            raise PhaseOrderError(f"Phase '{name}' declared twice", phase=name)
        self._graph[name] = set(requires)
        self._order.append(name)

    @property
    def declared_order(self) -> List[str]:
        return list(self._order)

    def get_order(self) -> List[str]:
        """Return phases in a topological order."""
        try:
            return list(TopologicalSorter(self._graph).static_order())
        except CycleError as e:
            raise PhaseOrderError(f"Phase dependency cycle: {e.args[1]}") from e

    def get_ready(self, completed: Set[str]) -> List[str]:
        """Return phases that are ready to execute given completed set."""
        return [name for name in self._order if name not in completed and self._graph[name].issubset(completed)]

    def missing_requirements(self, name: str, completed: Iterable[str]) -> Set[str]:
        return self._graph[name] - set(completed)

    def validate(self) -> None:
        unknown = {req for reqs in self._graph.values() for req in reqs} - set(self._graph)
        if unknown:
            raise PhaseOrderError(f"Unknown phase requirement(s): {sorted(unknown)}")
        self.get_order()
        seen: Set[str] = set()
        for name in self._order:
            missing = self._graph[name] - seen
            if missing:
                raise PhaseOrderError(
                    f"Phase '{name}' is declared before its requirement(s) {sorted(missing)}", phase=name
                )
            seen.add(name)
