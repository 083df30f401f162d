# infrastructure/frontmatter.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

FENCE = '---'


class FrontmatterError(ValueError):
    pass


class YamlFrontmatterLoader:
    """
    Reads the YAML block fenced by ``---`` lines at the top of a file.

    Files without a front matter block yield ``{}``. Malformed YAML raises
    ``yaml.YAMLError``; a block that is not a mapping raises
    ``FrontmatterError``.
    """

    def load(self, file_path: str) -> Dict[str, Any]:
        text = Path(file_path).read_text(encoding='utf-8')
        block = self.extract_block(text)
        if block is None:
            return {}
        data = yaml.safe_load(block)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise FrontmatterError(f'Front matter in {file_path} must be a mapping, got {type(data).__name__}')
        return data

    @staticmethod
    def extract_block(text: str):
        lines = text.lstrip('\ufeff').splitlines()
        if not lines or lines[0].strip() != FENCE:
            return None
        for index, line in enumerate(lines[1:], start=1):
            if line.strip() == FENCE:
                return '\n'.join(lines[1:index])
        return None
