# domain/ports/file_probe_port.py
from __future__ import annotations

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class FileProbePort(Protocol):
    """Glob lookup used for hook-file discovery and page scanning."""

    def find_matching(self, directory: str, pattern: str) -> List[str]:
        """Return matching file paths in a stable order."""
        ...
