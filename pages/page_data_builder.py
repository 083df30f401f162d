# pages/page_data_builder.py
from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, Dict, Optional, Sequence

from domain.ports.frontmatter_port import FrontmatterLoaderPort
from .path_resolver import resolve_path

logger = logging.getLogger(__name__)


def merge_page_data(page_data: Dict[str, Any], path_data: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge where path-derived keys win over front matter."""
    return {**page_data, **path_data}


class PageDataBuilder:
    """
    Builds the data record for one page source file.

    Front matter is loaded through the injected loader; loader errors are not
    caught here.
    """

    def __init__(self, pages_root: str, frontmatter_loader: FrontmatterLoaderPort,
                 extensions: Optional[Sequence[str]] = None):
        self.pages_root = PurePosixPath(str(pages_root).replace('\\', '/'))
        self.frontmatter_loader = frontmatter_loader
        self.extensions = tuple(extensions or ())

    def relative_path(self, page_source_path: str) -> str:
        source = PurePosixPath(str(page_source_path).replace('\\', '/'))
        return source.relative_to(self.pages_root).as_posix()

    def build(self, page_source_path: str) -> Dict[str, Any]:
        page_data = dict(self.frontmatter_loader.load(page_source_path) or {})
        path_data = resolve_path(self.relative_path(page_source_path), self.extensions).as_page_data()

        overridden = sorted(set(page_data) & set(path_data))
        if overridden:
            logger.debug(f'Front matter keys {overridden} in {page_source_path} replaced by path data')

        return merge_page_data(page_data, path_data)
