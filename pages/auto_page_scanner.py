# pages/auto_page_scanner.py
from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Iterable, List, Optional, Sequence

from domain.pages import Page
from domain.ports.file_probe_port import FileProbePort
from domain.ports.frontmatter_port import FrontmatterLoaderPort
from .page_data_builder import PageDataBuilder
from .path_resolver import resolve_path

logger = logging.getLogger(__name__)

PRIVATE_PREFIX = '_'
TEMPLATE_PREFIX = 'template-'


def is_private(relative_path: str) -> bool:
    """A path whose first segment starts with ``_`` is never a page."""
    first = relative_path.replace('\\', '/').lstrip('/').split('/', 1)[0]
    return first.startswith(PRIVATE_PREFIX)


def is_template(relative_path: str) -> bool:
    return PurePosixPath(relative_path.replace('\\', '/')).name[:len(TEMPLATE_PREFIX)] == TEMPLATE_PREFIX


class AutoPageScanner:
    """
    Turns the files of a pages directory into candidate pages.

    Filtering happens on the raw relative path, before route resolution.
    Files with a front matter extension get their metadata from
    ``PageDataBuilder``; the rest carry the path-derived record only.
    """

    def __init__(self, file_probe: FileProbePort,
                 frontmatter_loader: Optional[FrontmatterLoaderPort] = None,
                 frontmatter_extensions: Iterable[str] = ('.md', '.markdown')):
        self.file_probe = file_probe
        self.frontmatter_loader = frontmatter_loader
        self.frontmatter_extensions = tuple(frontmatter_extensions)

    def candidate_files(self, pages_root: str, extensions: Sequence[str]) -> List[str]:
        seen = {}
        for ext in extensions:
            for path in self.file_probe.find_matching(str(pages_root), f'**/*{ext}'):
                seen.setdefault(path, None)
        return list(seen)

    def scan(self, pages_root: str, extensions: Sequence[str]) -> List[Page]:
        root = PurePosixPath(str(pages_root).replace('\\', '/'))
        builder = None
        if self.frontmatter_loader is not None:
            builder = PageDataBuilder(root.as_posix(), self.frontmatter_loader, extensions)

        pages: List[Page] = []
        skipped = 0
        for source in self.candidate_files(root.as_posix(), extensions):
            relative = PurePosixPath(source.replace('\\', '/')).relative_to(root).as_posix()
            if is_private(relative) or is_template(relative):
                skipped += 1
                continue

            if builder is not None and relative.endswith(self.frontmatter_extensions):
                metadata = builder.build(source)
            else:
                metadata = resolve_path(relative, extensions).as_page_data()
            route_path = metadata.pop('path')
            pages.append(Page(component_path=source, route_path=route_path, metadata=metadata))

        logger.info(f'Scanned {root}: {len(pages)} page(s), {skipped} private or template file(s) skipped')
        return pages
