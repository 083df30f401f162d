import pytest

from pages.path_resolver import normalize_relative_path, resolve_path, strip_extension


@pytest.mark.parametrize('relative, route', [
    ('about.js', '/about/'),
    ('index.js', '/'),
    ('blog/index.js', '/blog/'),
    ('blog/first-post.jsx', '/blog/first-post/'),
    ('404.js', '/404/'),
    ('./docs/intro.js', '/docs/intro/'),
    ('docs\\windows\\page.js', '/docs/windows/page/'),
    ('/leading/slash.js', '/leading/slash/'),
])
def test_routes(relative, route):
    assert resolve_path(relative, ['.js', '.jsx']).route_path == route


def test_longest_extension_wins():
    assert strip_extension('post.page.js', ['.js', '.page.js']) == 'post'
    assert strip_extension('post.page.js') == 'post.page'
    assert strip_extension('.eslintrc') == '.eslintrc'


def test_path_metadata():
    data = resolve_path('blog/2020/hello.md', ['.md'])
    assert data.route_path == '/blog/2020/hello/'
    assert data.dirname == 'blog/2020'
    assert data.file_name == 'hello'
    assert data.slug == 'hello'
    assert data.as_page_data() == {
        'path': '/blog/2020/hello/',
        'dirname': 'blog/2020',
        'file_name': 'hello',
        'slug': 'hello',
        'params': [],
    }


def test_parameter_segments():
    data = resolve_path('users/[id]/posts/[...rest].js', ['.js'])
    assert data.route_path == '/users/:id/posts/*rest/'
    assert data.params == ('id', 'rest')


def test_index_is_flagged():
    assert resolve_path('docs/index.js').is_index
    assert not resolve_path('docs/intro.js').is_index


@pytest.mark.parametrize('bad', ['', '../secret.js', 'a/../../b.js', './'])
def test_rejects_unresolvable_paths(bad):
    with pytest.raises(ValueError):
        normalize_relative_path(bad)


def test_pure_function():
    assert resolve_path('a/b.js', ('.js',)) == resolve_path('a/b.js', ('.js',))
