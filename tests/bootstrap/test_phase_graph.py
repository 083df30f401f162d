import pytest

from bootstrap.core.orchestrator import default_phases
from bootstrap.core.phase_graph import PhaseGraph
from bootstrap.exceptions import PhaseOrderError
from bootstrap.phases.base_phase import BootstrapPhase, PhaseResult


def make_phase(name, requires=()):
    class _Phase(BootstrapPhase):
        PHASE_NAME = name
        REQUIRES = tuple(requires)

        async def execute(self, context):
            return PhaseResult.success_result(name)

    return _Phase()


def test_default_phases_are_valid():
    graph = PhaseGraph(default_phases())
    graph.validate()
    assert graph.declared_order == [
        'init', 'config_load', 'plugin_load', 'scaffold', 'runtime_modules', 'schema_build',
        'extension_collection', 'explicit_pages', 'auto_pages', 'not_found_alias', 'query_drain',
    ]
    assert graph.get_order() == graph.declared_order


def test_auto_pages_depend_on_extensions_and_explicit_pages():
    order = PhaseGraph(default_phases()).get_order()
    assert order.index('extension_collection') < order.index('auto_pages')
    assert order.index('explicit_pages') < order.index('auto_pages')


def test_declared_before_requirement():
    graph = PhaseGraph([make_phase('b', ['a']), make_phase('a')])
    with pytest.raises(PhaseOrderError):
        graph.validate()


def test_unknown_requirement():
    with pytest.raises(PhaseOrderError, match='Unknown'):
        PhaseGraph([make_phase('a', ['missing'])]).validate()


def test_cycle():
    with pytest.raises(PhaseOrderError, match='cycle'):
        PhaseGraph([make_phase('a', ['b']), make_phase('b', ['a'])]).get_order()


def test_duplicate_phase():
    with pytest.raises(PhaseOrderError):
        PhaseGraph([make_phase('a'), make_phase('a')])


def test_ready_and_missing():
    graph = PhaseGraph([make_phase('a'), make_phase('b', ['a']), make_phase('c', ['a', 'b'])])
    assert graph.get_ready(set()) == ['a']
    assert graph.get_ready({'a'}) == ['b']
    assert graph.missing_requirements('c', ['a']) == {'b'}
