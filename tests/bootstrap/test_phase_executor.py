import logging

import pytest

from bootstrap.config.bootstrap_config import BootstrapConfig
from bootstrap.context.bootstrap_context_builder import create_bootstrap_context
from bootstrap.core.phase_executor import BootstrapPhaseExecutor
from bootstrap.exceptions import (
    ConfigurationError,
    FatalBootstrapError,
    PhaseOrderError,
    ScaffoldError,
)
from bootstrap.phases.base_phase import BootstrapPhase, FailurePolicy, PhaseResult
from core.signals import BOOTSTRAP_ERROR_OCCURRED, BOOTSTRAP_WARNING_ISSUED, PHASE_COMPLETE


def make_phase(name, requires=(), policy=FailurePolicy.PROPAGATE, error=None, result=None,
               failure_error=None, calls=None):
    attrs = {'PHASE_NAME': name, 'REQUIRES': tuple(requires), 'FAILURE_POLICY': policy}
    if failure_error is not None:
        attrs['FAILURE_ERROR'] = failure_error

    async def execute(self, context):
        if calls is not None:
            calls.append(name)
        if error is not None:
            raise error
        return result or PhaseResult.success_result(f'{name} done')

    attrs['execute'] = execute
    return type(f'{name.title()}Phase', (BootstrapPhase,), attrs)()


@pytest.fixture
def context(tmp_path):
    return create_bootstrap_context('test_run', BootstrapConfig(directory=tmp_path))


@pytest.mark.asyncio
async def test_runs_phases_in_order_and_records_completion(context):
    calls = []
    phases = [make_phase('a', calls=calls), make_phase('b', ['a'], calls=calls)]
    summary = await BootstrapPhaseExecutor(context).execute_phases(phases)

    assert calls == ['a', 'b']
    assert context.completed_phases == ['a', 'b']
    assert summary.successful_phases == 2
    assert context.event_bus.signal_names().count(PHASE_COMPLETE) == 2


@pytest.mark.asyncio
async def test_best_effort_failure_is_logged_and_skipped(context, caplog):
    calls = []
    phases = [
        make_phase('scaffold', policy=FailurePolicy.BEST_EFFORT, error=ScaffoldError('disk full'), calls=calls),
        make_phase('after', ['scaffold'], calls=calls),
    ]
    with caplog.at_level(logging.WARNING):
        summary = await BootstrapPhaseExecutor(context).execute_phases(phases)

    assert calls == ['scaffold', 'after']
    assert summary.failed_phases == 1
    assert summary.degraded_phases == ['scaffold']
    assert 'disk full' in caplog.text
    assert BOOTSTRAP_WARNING_ISSUED in context.event_bus.signal_names()


@pytest.mark.asyncio
async def test_fatal_failure_wraps_and_raises(context, caplog):
    calls = []
    phases = [
        make_phase('config_load', policy=FailurePolicy.FATAL, error=KeyError('title'),
                   failure_error=ConfigurationError, calls=calls),
        make_phase('never', ['config_load'], calls=calls),
    ]
    with pytest.raises(ConfigurationError) as exc_info:
        await BootstrapPhaseExecutor(context).execute_phases(phases)

    assert calls == ['config_load']
    assert isinstance(exc_info.value.__cause__, KeyError)
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)
    assert BOOTSTRAP_ERROR_OCCURRED in context.event_bus.signal_names()


@pytest.mark.asyncio
async def test_fatal_failure_exits_when_configured(tmp_path):
    context = create_bootstrap_context('test_run', BootstrapConfig(directory=tmp_path, exit_on_fatal=True))
    phases = [make_phase('config_load', policy=FailurePolicy.FATAL, error=ConfigurationError('missing'))]
    with pytest.raises(SystemExit) as exc_info:
        await BootstrapPhaseExecutor(context).execute_phases(phases)
    assert exc_info.value.code == 1
    assert isinstance(exc_info.value.__cause__, FatalBootstrapError)


@pytest.mark.asyncio
async def test_propagated_errors_reach_the_caller_unchanged(context):
    boom = RuntimeError('schema exploded')
    phases = [make_phase('schema_build', error=boom), make_phase('later', ['schema_build'])]
    with pytest.raises(RuntimeError) as exc_info:
        await BootstrapPhaseExecutor(context).execute_phases(phases)
    assert exc_info.value is boom
    assert context.completed_phases == []


@pytest.mark.asyncio
async def test_failed_result_becomes_the_phase_error(context):
    failed = PhaseResult.failure_result('could not load', errors=['bad plugin'])
    phases = [make_phase('plugin_load', policy=FailurePolicy.FATAL, result=failed, failure_error=ConfigurationError)]
    with pytest.raises(ConfigurationError, match='bad plugin'):
        await BootstrapPhaseExecutor(context).execute_phases(phases)


@pytest.mark.asyncio
async def test_phase_order_is_enforced_before_anything_runs(context):
    calls = []
    phases = [make_phase('auto_pages', ['extension_collection'], calls=calls), make_phase('extension_collection', calls=calls)]
    with pytest.raises(PhaseOrderError):
        await BootstrapPhaseExecutor(context).execute_phases(phases)
    assert calls == []


@pytest.mark.asyncio
async def test_metrics(context):
    executor = BootstrapPhaseExecutor(context)
    await executor.execute_phases([make_phase('a'), make_phase('b')])
    metrics = executor.get_phase_metrics()
    assert metrics['total_phases'] == 2
    assert set(metrics['phase_durations']) == {'a', 'b'}
