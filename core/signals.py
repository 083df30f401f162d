# core/signals.py
"""Signal names published on the bootstrap event bus."""

SYSTEM_INITIALIZATION_STARTED = 'SYSTEM_INITIALIZATION_STARTED'
SYSTEM_BOOTSTRAPPED = 'SYSTEM_BOOTSTRAPPED'
PROGRAM_CONFIGURED = 'PROGRAM_CONFIGURED'
CONFIGURATION_LOADED = 'CONFIGURATION_LOADED'
PLUGINS_LOADED = 'PLUGINS_LOADED'
RUNTIME_MODULE_WRITTEN = 'RUNTIME_MODULE_WRITTEN'
SCHEMA_BUILT = 'SCHEMA_BUILT'
EXTENSIONS_RESOLVED = 'EXTENSIONS_RESOLVED'
PAGE_UPSERTED = 'PAGE_UPSERTED'
PAGE_CREATION_COMPLETE = 'PAGE_CREATION_COMPLETE'
QUERY_BACKLOG_DRAINED = 'QUERY_BACKLOG_DRAINED'
PHASE_COMPLETE = 'PHASE_COMPLETE'
BOOTSTRAP_ERROR_OCCURRED = 'BOOTSTRAP_ERROR_OCCURRED'
BOOTSTRAP_WARNING_ISSUED = 'BOOTSTRAP_WARNING_ISSUED'

SYSTEM_LIFECYCLE_SIGNALS = {SYSTEM_INITIALIZATION_STARTED, SYSTEM_BOOTSTRAPPED}
PAGE_SIGNALS = {PAGE_UPSERTED, PAGE_CREATION_COMPLETE, QUERY_BACKLOG_DRAINED}
ERROR_SIGNALS = {BOOTSTRAP_ERROR_OCCURRED, BOOTSTRAP_WARNING_ISSUED}
ALL_BOOTSTRAP_SIGNALS = {
    SYSTEM_INITIALIZATION_STARTED, SYSTEM_BOOTSTRAPPED, PROGRAM_CONFIGURED, CONFIGURATION_LOADED,
    PLUGINS_LOADED, RUNTIME_MODULE_WRITTEN, SCHEMA_BUILT, EXTENSIONS_RESOLVED, PAGE_UPSERTED,
    PAGE_CREATION_COMPLETE, QUERY_BACKLOG_DRAINED, PHASE_COMPLETE, BOOTSTRAP_ERROR_OCCURRED,
    BOOTSTRAP_WARNING_ISSUED,
}
