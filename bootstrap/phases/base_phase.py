"""
Base Phase - Abstract interface for all bootstrap phases.

Each phase names the phases it depends on (``REQUIRES``) and how its
failures are handled (``FAILURE_POLICY``); the executor enforces both.
"""
from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

from core.exceptions import BootstrapError

logger = logging.getLogger(__name__)


class FailurePolicy(str, Enum):
    # Log a diagnostic and abort the bootstrap.
    FATAL = "fatal"
    # Log and continue with degraded output.
    BEST_EFFORT = "best_effort"
    # Not handled by the bootstrap; surfaces to the caller.
    PROPAGATE = "propagate"


@dataclass
class PhaseResult:
    """Result of a bootstrap phase execution."""
    success: bool
    message: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success_result(
        cls,
        message: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> 'PhaseResult':
        """Create a successful phase result."""
        return cls(
            success=True,
            message=message,
            errors=[],
            warnings=warnings or [],
            metadata=metadata or {}
        )

    @classmethod
    def failure_result(
        cls,
        message: str,
        errors: List[str],
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> 'PhaseResult':
        """Create a failed phase result."""
        return cls(
            success=False,
            message=message,
            errors=errors,
            warnings=warnings or [],
            metadata=metadata or {}
        )

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


class BootstrapPhase(ABC):
    """
    Abstract base class for all bootstrap phases.

    Subclasses set ``PHASE_NAME``, ``REQUIRES`` and ``FAILURE_POLICY`` and
    implement ``execute``. A phase signals failure either by raising or by
    returning a failed ``PhaseResult``; in the latter case the executor
    raises ``FAILURE_ERROR`` built from the result.
    """

    PHASE_NAME: str = ''
    REQUIRES: Tuple[str, ...] = ()
    FAILURE_POLICY: FailurePolicy = FailurePolicy.PROPAGATE
    FAILURE_ERROR: Type[BootstrapError] = BootstrapError

    def __init__(self):
        self.phase_name = self.PHASE_NAME or self.__class__.__name__
        self.logger = logging.getLogger(f"bootstrap.{self.phase_name.lower()}")

    @abstractmethod
    async def execute(self, context) -> PhaseResult:
        """
        Execute this bootstrap phase.

        Args:
            context: BootstrapContext containing shared state

        Returns:
            PhaseResult indicating success/failure and any warnings/errors
        """

    async def pre_execute(self, context) -> None:
        self.logger.debug(f"Starting phase: {self.phase_name}")

    async def post_execute(self, context, result: PhaseResult) -> None:
        if result.success:
            self.logger.info(f"✓ Phase completed: {self.phase_name} - {result.message}")
        else:
            self.logger.error(f"✗ Phase failed: {self.phase_name} - {result.message}")
            for error in result.errors:
                self.logger.error(f"  Error: {error}")

        for warning in result.warnings:
            self.logger.warning(f"  Warning: {warning}")

    def failure_from_result(self, result: PhaseResult) -> BootstrapError:
        detail = '; '.join(result.errors) if result.errors else result.message
        return self.FAILURE_ERROR(f"{result.message}: {detail}" if result.errors else detail)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.phase_name} requires={list(self.REQUIRES)}>"


async def maybe_await(value: Any) -> Any:
    """Collaborators may answer synchronously or with an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value
