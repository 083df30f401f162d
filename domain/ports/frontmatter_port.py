# domain/ports/frontmatter_port.py
from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class FrontmatterLoaderPort(Protocol):
    def load(self, file_path: str) -> Dict[str, Any]: ...
