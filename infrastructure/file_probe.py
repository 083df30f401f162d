# infrastructure/file_probe.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class GlobFileProbe:
    """
    ``pathlib`` glob lookup returning absolute posix paths of files, sorted.

    Symlinks are not resolved: a match is reported under ``directory`` even
    when it links to a file elsewhere.
    """

    def find_matching(self, directory: str, pattern: str) -> List[str]:
        root = Path(directory)
        if not root.is_dir():
            logger.debug("Probe directory not found: %s", root)
            return []
        matches = sorted(p.absolute().as_posix() for p in root.glob(pattern) if p.is_file())
        logger.debug("Probe %s/%s -> %d match(es)", root, pattern, len(matches))
        return matches
