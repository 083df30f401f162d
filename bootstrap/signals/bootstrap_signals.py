import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.signals import (
    ALL_BOOTSTRAP_SIGNALS,
    BOOTSTRAP_ERROR_OCCURRED,
    BOOTSTRAP_WARNING_ISSUED,
    ERROR_SIGNALS,
    PAGE_SIGNALS,
    PHASE_COMPLETE,
    SYSTEM_BOOTSTRAPPED,
    SYSTEM_INITIALIZATION_STARTED,
    SYSTEM_LIFECYCLE_SIGNALS,
)

logger = logging.getLogger(__name__)


def is_error_signal(signal_type: str) -> bool:
    return signal_type in ERROR_SIGNALS


def get_signal_category(signal_type: str) -> str:
    if signal_type in SYSTEM_LIFECYCLE_SIGNALS:
        return 'system_lifecycle'
    elif signal_type in PAGE_SIGNALS:
        return 'pages'
    elif signal_type in ERROR_SIGNALS:
        return 'error'
    elif signal_type == PHASE_COMPLETE:
        return 'phase_completion'
    return 'bootstrap'


def validate_signal_type(signal_type: str) -> bool:
    return signal_type in ALL_BOOTSTRAP_SIGNALS


class BootstrapSignalEmitter:
    def __init__(self, event_bus: Optional[Any], run_id: str):
        self.event_bus = event_bus
        self.run_id = run_id
        self.signal_count = 0
        if not event_bus:
            logger.warning('No event bus provided to BootstrapSignalEmitter - signals will be logged only')
        logger.debug(f'BootstrapSignalEmitter initialized for run_id: {run_id}')

    async def emit_signal(self, signal_type: str, payload: Dict[str, Any]) -> None:
        self.signal_count += 1
        if not validate_signal_type(signal_type):
            logger.warning(f'Unknown signal type: {signal_type}')
        enhanced_payload = {
            'signal_type': signal_type,
            'run_id': self.run_id,
            'signal_sequence': self.signal_count,
            'category': get_signal_category(signal_type),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            **payload,
        }
        log_level = logging.ERROR if is_error_signal(signal_type) else logging.DEBUG
        logger.log(log_level, f"Bootstrap signal [{signal_type}]: {payload.get('message', '')}")
        if self.event_bus:
            self.event_bus.publish(signal_type, enhanced_payload)

    async def emit_bootstrap_started(self) -> None:
        await self.emit_signal(SYSTEM_INITIALIZATION_STARTED, {'message': f'Site bootstrap started for run_id: {self.run_id}'})

    async def emit_bootstrap_completed(self, page_count: int, duration_seconds: float) -> None:
        await self.emit_signal(SYSTEM_BOOTSTRAPPED, {
            'page_count': page_count,
            'duration_seconds': duration_seconds,
            'message': f'Bootstrap finished with {page_count} page(s) in {duration_seconds:.2f}s',
        })

    async def emit_phase_complete(self, phase_name: str, success: bool, **metadata) -> None:
        await self.emit_signal(PHASE_COMPLETE, {
            'phase_name': phase_name,
            'success': success,
            'message': f"Phase {phase_name} {('completed' if success else 'failed')}",
            **metadata,
        })

    async def emit_error(self, error_type: str, phase_name: Optional[str], error_message: str) -> None:
        await self.emit_signal(BOOTSTRAP_ERROR_OCCURRED, {
            'error_type': error_type,
            'phase_name': phase_name,
            'error_message': error_message,
            'message': f'Bootstrap error: {error_message}',
        })

    async def emit_warning(self, warning_type: str, phase_name: Optional[str], warning_message: str) -> None:
        await self.emit_signal(BOOTSTRAP_WARNING_ISSUED, {
            'warning_type': warning_type,
            'phase_name': phase_name,
            'warning_message': warning_message,
            'message': f'Bootstrap warning: {warning_message}',
        })
