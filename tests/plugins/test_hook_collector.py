from unittest.mock import MagicMock

from domain.plugins import PluginDescriptor
from infrastructure.file_probe import GlobFileProbe
from plugins.hook_collector import BROWSER_HOOK, SSR_HOOK, collect_hooks, hook_file_pattern


def plugin(name, path, **options):
    return PluginDescriptor(name=name, resolve_path=path, options=options)


def test_pattern():
    assert hook_file_pattern(BROWSER_HOOK) == 'gatsby-browser*'
    assert hook_file_pattern(SSR_HOOK) == 'gatsby-ssr*'


def test_preserves_plugin_order_and_drops_non_implementers():
    probe = MagicMock()
    matches = {
        '/plugins/zeta': ['/plugins/zeta/gatsby-browser.js'],
        '/plugins/alpha': [],
        '/plugins/mid': ['/plugins/mid/gatsby-browser.js', '/plugins/mid/gatsby-browser-extra.js'],
    }
    probe.find_matching.side_effect = lambda directory, pattern: matches[directory]
    plugins = [plugin('zeta', '/plugins/zeta', a=1), plugin('alpha', '/plugins/alpha'), plugin('mid', '/plugins/mid')]

    hooks = collect_hooks(BROWSER_HOOK, plugins, probe)

    assert [h.hook_file_path for h in hooks] == ['/plugins/zeta/gatsby-browser.js', '/plugins/mid/gatsby-browser.js']
    assert hooks[0].options == {'a': 1}
    probe.find_matching.assert_any_call('/plugins/alpha', 'gatsby-browser*')


def test_same_hook_file_twice_is_not_deduplicated():
    probe = MagicMock()
    probe.find_matching.return_value = ['/shared/gatsby-ssr.js']
    plugins = [plugin('one', '/shared'), plugin('two', '/shared', x=True)]
    hooks = collect_hooks(SSR_HOOK, plugins, probe)
    assert len(hooks) == 2
    assert [h.options for h in hooks] == [{}, {'x': True}]


def test_with_real_files(tmp_path, make_files):
    make_files(tmp_path, {'p1/gatsby-ssr.js': '', 'p2/gatsby-browser.js': ''})
    plugins = [plugin('p1', (tmp_path / 'p1').as_posix()), plugin('p2', (tmp_path / 'p2').as_posix())]
    hooks = collect_hooks(SSR_HOOK, plugins, GlobFileProbe())
    assert len(hooks) == 1
    assert hooks[0].hook_file_path.endswith('p1/gatsby-ssr.js')
