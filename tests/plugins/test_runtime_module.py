from datetime import date, datetime

import pytest

from core.exceptions import RuntimeTemplateError
from domain.plugins import HookDescriptor
from plugins.runtime_module import (
    RuntimeModuleTemplate,
    canonical_json,
    generate_runtime_module,
    render_plugins_literal,
)

HOOKS = [
    HookDescriptor(hook_file_path='/plugins/a/gatsby-browser.js', options={'b': 2, 'a': [1, {'z': 0, 'y': 1}]}),
    HookDescriptor(hook_file_path='/plugins/b/gatsby-browser.js', options={}),
]


def test_canonical_json_sorts_keys():
    assert canonical_json({'b': 1, 'a': {'d': 1, 'c': 2}}) == '{"a":{"c":2,"d":1},"b":1}'


def test_literal_shape():
    literal = render_plugins_literal(HOOKS[:1])
    assert literal == (
        'var plugins = [{\n'
        '  plugin: require("/plugins/a/gatsby-browser.js"),\n'
        '  options: {"a":[1,{"y":1,"z":0}],"b":2},\n'
        '}]'
    )
    assert render_plugins_literal([]) == 'var plugins = []'


def test_deterministic_output():
    base = '%%{plugins}\nmodule.exports = plugins\n'
    reordered_options = [
        HookDescriptor(hook_file_path=HOOKS[0].hook_file_path, options={'a': [1, {'y': 1, 'z': 0}], 'b': 2}),
        HOOKS[1],
    ]
    first = generate_runtime_module(base, HOOKS)
    assert first == generate_runtime_module(base, HOOKS)
    assert first == generate_runtime_module(base, reordered_options)


def test_slot_is_filled():
    base = '// header\n%%{plugins}\nmodule.exports = plugins\n'
    output = generate_runtime_module(base, HOOKS)
    assert output.startswith('// header\nvar plugins = [{')
    assert output.endswith('}]\nmodule.exports = plugins\n')
    assert '%%' not in output


def test_template_without_slot_gets_literal_prepended():
    base = 'module.exports = plugins\n'
    output = generate_runtime_module(base, [])
    assert output == 'var plugins = []\nmodule.exports = plugins\n'


def test_more_than_one_slot_is_rejected():
    with pytest.raises(RuntimeTemplateError):
        generate_runtime_module('%%{plugins}\n%%plugins\n', HOOKS)


def test_javascript_dollar_signs_are_left_alone():
    base = '%%{plugins}\nconst tpl = `${value}`\n'
    assert '`${value}`' in generate_runtime_module(base, [])


def test_slot_count():
    assert RuntimeModuleTemplate('%%{plugins} %%plugins %%{other}').slot_count() == 2


def test_escaped_delimiters_survive_around_the_slot():
    base = '%%{plugins}\nconst s = "100%%%%"\n'
    output = generate_runtime_module(base, [])
    assert output == 'var plugins = []\nconst s = "100%%%%"\n'


def test_slot_filling_matches_prepending_outside_the_slot():
    body = 'const s = "%%%%"\nmodule.exports = plugins\n'
    with_slot = generate_runtime_module('%%{plugins}\n' + body, HOOKS)
    without_slot = generate_runtime_module(body, HOOKS)
    assert with_slot == without_slot


def test_escaped_slot_is_not_a_slot():
    assert RuntimeModuleTemplate('%%%%{plugins}').slot_count() == 0


def test_dates_in_options_are_written_as_iso_strings():
    hook = HookDescriptor(hook_file_path='/p/gatsby-browser.js',
                          options={'since': date(2020, 1, 1), 'at': datetime(2020, 1, 1, 12, 30)})
    assert canonical_json(hook.options) == '{"at":"2020-01-01T12:30:00","since":"2020-01-01"}'
    assert 'options: {"at":"2020-01-01T12:30:00","since":"2020-01-01"}' in render_plugins_literal([hook])


def test_unsupported_option_values_still_fail():
    with pytest.raises(TypeError):
        canonical_json({'value': object()})
