# infrastructure/schema/site_schema.py
"""
A small read-only schema over the site configuration and page registry.

Queries are dotted paths whose first segment names a root field:

    site.site_metadata.title
    all_site_page
    site_page.metadata.title      (page selected by ``context['path']``)

It is deliberately minimal; plugins needing a richer query language provide
their own ``SchemaBuilderPort``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

Resolver = Callable[[Dict[str, Any]], Any]


class QueryResult(BaseModel):
    data: Any = None
    errors: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _descend(value: Any, name: str) -> Any:
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=False)
    if isinstance(value, Mapping):
        if name not in value:
            raise KeyError(name)
        return value[name]
    if hasattr(value, name):
        return getattr(value, name)
    raise KeyError(name)


class SiteSchema:
    def __init__(self, root_fields: Dict[str, Resolver]):
        self.root_fields = dict(root_fields)

    def execute(self, query: str, context: Dict[str, Any]) -> QueryResult:
        path = [p for p in (query or '').strip().split('.') if p]
        if not path:
            return QueryResult(errors=['Empty query'])

        root, rest = path[0], path[1:]
        resolver = self.root_fields.get(root)
        if resolver is None:
            return QueryResult(errors=[f"Unknown root field '{root}'"])

        value = resolver(context or {})
        walked = [root]
        for name in rest:
            if value is None:
                break
            try:
                value = _descend(value, name)
            except KeyError:
                return QueryResult(errors=[f"Cannot query field '{name}' on '{'.'.join(walked)}'"])
            walked.append(name)

        if isinstance(value, BaseModel):
            value = value.model_dump()
        return QueryResult(data=value)


class SiteSchemaBuilder:
    """Builds a ``SiteSchema`` that reads the live registry and site config of a bootstrap context."""

    def __init__(self, context: Any):
        self.context = context

    def build(self) -> SiteSchema:
        context = self.context

        def site(_args: Dict[str, Any]) -> Dict[str, Any]:
            site_config = context.site_config
            return {
                'site_metadata': dict(site_config.site_metadata) if site_config else {},
                'path_prefix': site_config.path_prefix if site_config else '',
            }

        def all_site_page(_args: Dict[str, Any]) -> List[Dict[str, Any]]:
            return [page.model_dump() for page in context.page_registry.list()]

        def site_page(args: Dict[str, Any]) -> Any:
            page = context.page_registry.get(args.get('path', ''))
            return page.model_dump() if page else None

        schema = SiteSchema({'site': site, 'all_site_page': all_site_page, 'site_page': site_page})
        logger.info(f'Site schema built with root fields {sorted(schema.root_fields)}')
        return schema
