# pages/__init__.py
from .auto_page_scanner import AutoPageScanner
from .page_data_builder import PageDataBuilder, merge_page_data
from .path_resolver import PathData, resolve_path

__all__ = ['AutoPageScanner', 'PageDataBuilder', 'merge_page_data', 'PathData', 'resolve_path']
