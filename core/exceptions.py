"""
Exception classes for the site bootstrap.

The bootstrap separates three kinds of failure:

* fatal errors (``FatalBootstrapError`` and subclasses) - the site cannot be
  built at all; the orchestrator logs a diagnostic and aborts,
* best-effort errors (``ScaffoldError``) - logged, the bootstrap continues
  with degraded output,
* everything else raised by collaborators - not caught by the bootstrap and
  surfaced to the caller unchanged.
"""

from typing import List, Optional


class BootstrapError(RuntimeError):
    """
    Base exception for all bootstrap-related errors.

    Carries the phase that raised it and, where relevant, the plugin or file
    involved so log lines stay actionable.
    """

    def __init__(self, message: str, phase: Optional[str] = None, subject: Optional[str] = None):
        super().__init__(message)
        self.phase = phase
        self.subject = subject

    def __str__(self) -> str:
        base_msg = super().__str__()

        context_parts = []
        if self.phase:
            context_parts.append(f"phase={self.phase}")
        if self.subject:
            context_parts.append(f"subject={self.subject}")

        if context_parts:
            return f"{base_msg} ({', '.join(context_parts)})"
        return base_msg


class FatalBootstrapError(BootstrapError):
    """Raised when the bootstrap cannot proceed at all."""

    exit_code = 1


class ConfigurationError(FatalBootstrapError):
    """
    Raised when the site configuration is missing or invalid.

    Includes unreadable YAML, a top-level value that is not a mapping and
    schema validation failures.
    """

    def __init__(self, message: str, config_path: Optional[str] = None, errors: Optional[List[str]] = None):
        super().__init__(message, phase="config_load", subject=config_path)
        self.config_path = config_path
        self.errors = errors or []

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.errors:
            error_list = "\n  - ".join(self.errors)
            return f"{base_msg}\nConfiguration errors:\n  - {error_list}"
        return base_msg


class PluginLoadError(FatalBootstrapError):
    """Raised when a declared plugin cannot be resolved."""

    def __init__(self, message: str, plugin_name: Optional[str] = None):
        super().__init__(message, phase="plugin_load", subject=plugin_name)
        self.plugin_name = plugin_name


class ScaffoldError(BootstrapError):
    """
    Raised when output directories or cache templates cannot be prepared.

    Never fatal: the orchestrator logs it and carries on.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, phase="scaffold", subject=path)
        self.path = path


class PhaseOrderError(BootstrapError):
    """Raised when a phase would run before the phases it depends on."""
    pass


class RuntimeTemplateError(BootstrapError):
    """Raised when a runtime module template declares more than one plugin slot."""
    pass


class BootstrapContextBuildError(BootstrapError):
    """Raised when BootstrapContextBuilder cannot assemble a valid BootstrapContext."""
    pass


class BootstrapTimeoutError(BootstrapError):
    """Raised when the whole bootstrap exceeds its configured time budget."""
    pass


class QueryExecutionError(BootstrapError):
    """Raised when a query is run before a schema is available."""
    pass


__all__ = [
    'BootstrapError',
    'FatalBootstrapError',
    'ConfigurationError',
    'PluginLoadError',
    'ScaffoldError',
    'PhaseOrderError',
    'RuntimeTemplateError',
    'BootstrapContextBuildError',
    'BootstrapTimeoutError',
    'QueryExecutionError',
]
