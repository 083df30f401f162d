from types import SimpleNamespace

from core.registry.page_registry import PageRegistry
from domain.site_config import SiteConfig
from infrastructure.schema.site_schema import SiteSchemaBuilder


def build_schema():
    registry = PageRegistry()
    registry.upsert({'path': '/about/', 'component': '/about.js', 'title': 'About'})
    context = SimpleNamespace(
        site_config=SiteConfig(site_metadata={'title': 'My Site'}, path_prefix='blog/'),
        page_registry=registry,
    )
    return SiteSchemaBuilder(context).build()


def test_site_fields():
    schema = build_schema()
    assert schema.execute('site.site_metadata.title', {}).data == 'My Site'
    assert schema.execute('site.path_prefix', {}).data == '/blog'


def test_pages():
    schema = build_schema()
    assert [p['route_path'] for p in schema.execute('all_site_page', {}).data] == ['/about/']
    assert schema.execute('site_page.metadata.title', {'path': '/about/'}).data == 'About'
    assert schema.execute('site_page', {'path': '/missing/'}).data is None


def test_errors():
    schema = build_schema()
    assert not schema.execute('nope', {}).ok
    assert not schema.execute('site.nope', {}).ok
    assert schema.execute('', {}).errors == ['Empty query']
