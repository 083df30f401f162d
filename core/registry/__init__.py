# core/registry/__init__.py
from .page_registry import PageLike, PageRegistry

__all__ = ["PageLike", "PageRegistry"]
