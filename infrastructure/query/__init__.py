# infrastructure/query/__init__.py
from .page_query_runner import PageQueryRunner

__all__ = ["PageQueryRunner"]
