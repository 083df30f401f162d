"""
Bootstrap Phase Executor - ordered phase execution with per-policy error handling.

Phases run strictly one after another. Each failure is handled according to
the phase's ``FAILURE_POLICY``:

* ``FATAL``       - critical diagnostic, then the fatal error is raised
                    (or the process exits when ``exit_on_fatal`` is set),
* ``BEST_EFFORT`` - the failure is logged and the next phase runs,
* ``PROPAGATE``   - the original exception reaches the caller untouched.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from core.exceptions import FatalBootstrapError, PhaseOrderError

from bootstrap.core.phase_graph import PhaseGraph
from bootstrap.phases.base_phase import FailurePolicy

if TYPE_CHECKING:
    from bootstrap.context.bootstrap_context import BootstrapContext
    from bootstrap.phases.base_phase import BootstrapPhase, PhaseResult

logger = logging.getLogger(__name__)


@dataclass
class PhaseExecutionResult:
    """Result of executing a bootstrap phase."""
    phase_name: str
    success: bool
    duration_seconds: float
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None

    @property
    def is_critical_failure(self) -> bool:
        return not self.success and isinstance(self.exception, FatalBootstrapError)


@dataclass
class PhaseExecutionSummary:
    """Summary of all phase executions."""
    total_phases: int
    successful_phases: int
    failed_phases: int
    total_duration: float
    results: List[PhaseExecutionResult] = field(default_factory=list)

    @property
    def degraded_phases(self) -> List[str]:
        return [r.phase_name for r in self.results if not r.success]

    def get(self, phase_name: str) -> Optional[PhaseExecutionResult]:
        return next((r for r in self.results if r.phase_name == phase_name), None)


class BootstrapPhaseExecutor:
    """Executes bootstrap phases in their declared order."""

    def __init__(self, context: BootstrapContext):
        self.context = context
        self.execution_results: List[PhaseExecutionResult] = []

    async def execute_phases(self, phases: Sequence[BootstrapPhase]) -> PhaseExecutionSummary:
        graph = PhaseGraph(phases)
        graph.validate()

        logger.info(f'Executing {len(phases)} bootstrap phases')
        start_time = datetime.now(timezone.utc)

        for i, phase in enumerate(phases, 1):
            logger.info(f'Phase {i}/{len(phases)}: {phase.phase_name}')
            missing = graph.missing_requirements(phase.phase_name, self.context.completed_phases)
            if missing:
                raise PhaseOrderError(
                    f"Phase '{phase.phase_name}' cannot start before {sorted(missing)}", phase=phase.phase_name
                )
            await self._execute_single_phase(phase)

        total_duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        successful = sum(1 for r in self.execution_results if r.success)
        summary = PhaseExecutionSummary(
            total_phases=len(phases),
            successful_phases=successful,
            failed_phases=len(self.execution_results) - successful,
            total_duration=total_duration,
            results=self.execution_results.copy()
        )
        self._log_execution_summary(summary)
        return summary

    async def _execute_single_phase(self, phase: BootstrapPhase) -> PhaseExecutionResult:
        phase_name = phase.phase_name
        start_time = datetime.now(timezone.utc)
        phase_result: Optional[PhaseResult] = None

        try:
            await phase.pre_execute(self.context)
            phase_result = await phase.execute(self.context)
            await phase.post_execute(self.context, phase_result)
            if not phase_result.success:
                raise phase.failure_from_result(phase_result)
        except Exception as e:
            duration = (datetime.now(timezone.utc) - start_time).total_seconds()
            return await self._handle_failure(phase, e, duration, phase_result)

        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        result = PhaseExecutionResult(
            phase_name=phase_name,
            success=True,
            duration_seconds=duration,
            warnings=phase_result.warnings.copy(),
            metadata=phase_result.metadata.copy()
        )
        self._complete(phase, result)
        logger.info(f'✓ Phase {phase_name} completed in {duration:.2f}s')
        await self.context.signal_emitter.emit_phase_complete(phase_name, True, duration_seconds=duration)
        return result

    async def _handle_failure(
        self,
        phase: BootstrapPhase,
        error: Exception,
        duration: float,
        phase_result: Optional[PhaseResult],
    ) -> PhaseExecutionResult:
        phase_name = phase.phase_name
        policy = phase.FAILURE_POLICY
        result = PhaseExecutionResult(
            phase_name=phase_name,
            success=False,
            duration_seconds=duration,
            errors=phase_result.errors.copy() if phase_result else [str(error)],
            warnings=phase_result.warnings.copy() if phase_result else [],
            metadata={'exception_type': type(error).__name__, 'failure_policy': policy.value},
            exception=error,
        )
        self.execution_results.append(result)

        if policy is FailurePolicy.BEST_EFFORT:
            logger.warning(f'✗ Phase {phase_name} failed after {duration:.2f}s; continuing: {error}')
            await self.context.signal_emitter.emit_warning(type(error).__name__, phase_name, str(error))
            self.context.completed_phases.append(phase_name)
            return result

        await self.context.signal_emitter.emit_error(type(error).__name__, phase_name, str(error))

        if policy is FailurePolicy.FATAL:
            fatal = error if isinstance(error, FatalBootstrapError) else phase.FAILURE_ERROR(str(error))
            if fatal is not error:
                fatal.__cause__ = error
            result.exception = fatal
            logger.critical(f'✗ Phase {phase_name} failed; the site cannot be built: {fatal}', exc_info=error)
            if self.context.config.exit_on_fatal:
                raise SystemExit(getattr(fatal, 'exit_code', 1)) from fatal
            raise fatal

        logger.error(f'✗ Phase {phase_name} failed after {duration:.2f}s: {error}')
        raise error

    def _complete(self, phase: BootstrapPhase, result: PhaseExecutionResult) -> None:
        self.execution_results.append(result)
        self.context.completed_phases.append(phase.phase_name)

    def _log_execution_summary(self, summary: PhaseExecutionSummary) -> None:
        logger.info('=== Bootstrap Phase Execution Summary ===')
        logger.info(f'Total phases: {summary.total_phases}')
        logger.info(f'Successful: {summary.successful_phases}')
        logger.info(f'Failed: {summary.failed_phases}')
        logger.info(f'Total duration: {summary.total_duration:.2f}s')

        if summary.failed_phases > 0:
            logger.warning('Degraded phases:')
            for result in summary.results:
                if not result.success:
                    logger.warning(f'  - {result.phase_name}: {result.errors}')

        logger.info('=== End Bootstrap Phase Summary ===')

    def get_phase_metrics(self) -> Dict[str, Any]:
        if not self.execution_results:
            return {}
        return {
            'total_phases': len(self.execution_results),
            'total_duration': sum(r.duration_seconds for r in self.execution_results),
            'longest_phase': max(self.execution_results, key=lambda r: r.duration_seconds).phase_name,
            'phase_durations': {r.phase_name: r.duration_seconds for r in self.execution_results}
        }
