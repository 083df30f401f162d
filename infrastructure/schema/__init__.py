# infrastructure/schema/__init__.py
from .site_schema import QueryResult, SiteSchema, SiteSchemaBuilder

__all__ = ["QueryResult", "SiteSchema", "SiteSchemaBuilder"]
