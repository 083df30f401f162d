# pages/path_resolver.py
"""
File path -> route path mapping for page components.

The mapping is a pure function of its input:

* separators are normalised to ``/``; leading ``./`` and ``/`` are dropped,
* the longest recognised extension is stripped (only the last suffix when
  nothing recognised matches, so ``post.page.js`` becomes ``post.page``),
* ``index`` files map to their directory (``blog/index.js`` -> ``/blog/``),
* every route except ``/`` carries a trailing slash,
* ``[name]`` segments become ``:name`` and ``[...name]`` segments become
  ``*name``; both are reported in ``params``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

INDEX_NAME = 'index'

_PARAM_SEGMENT = re.compile(r'^\[(\.\.\.)?([A-Za-z_][A-Za-z0-9_-]*)\]$')


@dataclass(frozen=True)
class PathData:
    route_path: str
    dirname: str
    file_name: str
    slug: str
    params: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_index(self) -> bool:
        return self.file_name == INDEX_NAME

    def as_page_data(self) -> Dict[str, Any]:
        """The path-derived record merged into page data."""
        return {
            'path': self.route_path,
            'dirname': self.dirname,
            'file_name': self.file_name,
            'slug': self.slug,
            'params': list(self.params),
        }


def normalize_relative_path(relative_path: str) -> List[str]:
    """Split a relative file path into clean posix segments."""
    if not relative_path:
        raise ValueError('Cannot resolve an empty page path')
    text = str(relative_path).replace('\\', '/')
    segments = [s for s in text.split('/') if s and s != '.']
    if not segments:
        raise ValueError(f'Cannot resolve page path {relative_path!r}')
    if '..' in segments:
        raise ValueError(f'Page path {relative_path!r} escapes the pages directory')
    return segments


def strip_extension(file_name: str, extensions: Optional[Sequence[str]] = None) -> str:
    matches = [ext for ext in (extensions or ()) if ext and file_name.endswith(ext) and len(ext) < len(file_name)]
    if matches:
        longest = max(matches, key=len)
        return file_name[: -len(longest)]
    stem, dot, _suffix = file_name.rpartition('.')
    # Dotfiles like ".eslintrc" have no extension to strip.
    return stem if dot and stem else file_name


def _route_segment(segment: str, params: List[str]) -> str:
    match = _PARAM_SEGMENT.match(segment)
    if not match:
        return segment
    catch_all, name = match.groups()
    params.append(name)
    return f'*{name}' if catch_all else f':{name}'


def resolve_path(relative_path: str, extensions: Optional[Sequence[str]] = None) -> PathData:
    """Resolve a path relative to the pages root into its route and path metadata."""
    segments = normalize_relative_path(relative_path)
    directories, raw_name = segments[:-1], segments[-1]
    file_name = strip_extension(raw_name, extensions)

    route_names = list(directories)
    if file_name != INDEX_NAME:
        route_names.append(file_name)

    params: List[str] = []
    route_segments = [_route_segment(s, params) for s in route_names]
    route_path = '/' + '/'.join(route_segments) + '/' if route_segments else '/'

    return PathData(
        route_path=route_path,
        dirname='/'.join(directories),
        file_name=file_name,
        slug=route_segments[-1] if route_segments else '',
        params=tuple(params),
    )
