# plugins/runtime_module.py
"""
Generation of the browser and server runtime integration modules.

A runtime module is a base template plus a ``var plugins = [...]`` literal
listing every hook file together with the options of the plugin that
provided it. Templates mark the injection point with a ``%%{plugins}`` slot;
a template without a slot gets the literal at its head.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, time
from string import Template
from typing import Any, List, Sequence, Tuple

from core.exceptions import RuntimeTemplateError
from domain.plugins import HookDescriptor

logger = logging.getLogger(__name__)

PLUGINS_VARIABLE = 'plugins'
SLOT_NAME = 'plugins'

RUNTIME_MODULE_FILES = {
    'browser': 'api-runner-browser.js',
    'ssr': 'api-runner-ssr.js',
}


class RuntimeModuleTemplate(Template):
    # '$' is everywhere in JavaScript; '%%' is not.
    delimiter = '%%'

    def slot_spans(self, name: str = SLOT_NAME) -> List[Tuple[int, int]]:
        """Spans of every ``%%{name}`` or ``%%name`` slot; escaped ``%%%%`` is not a slot."""
        return [
            match.span()
            for match in self.pattern.finditer(self.template)
            if (match.group('named') or match.group('braced')) == name
        ]

    def slot_count(self, name: str = SLOT_NAME) -> int:
        return len(self.slot_spans(name))


def _encode_scalar(value: Any) -> str:
    # YAML hands back dates and times for unquoted ISO values.
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')


def canonical_json(value: Any) -> str:
    """Deterministic JSON: sorted keys, no insignificant whitespace, ISO dates."""
    return json.dumps(value, sort_keys=True, separators=(',', ':'), ensure_ascii=False, default=_encode_scalar)


def render_plugin_entry(hook: HookDescriptor) -> str:
    return (
        '{\n'
        f'  plugin: require({json.dumps(hook.hook_file_path)}),\n'
        f'  options: {canonical_json(hook.options)},\n'
        '}'
    )


def render_plugins_literal(hooks: Sequence[HookDescriptor]) -> str:
    entries = ','.join(render_plugin_entry(h) for h in hooks if h.is_implemented)
    return f'var {PLUGINS_VARIABLE} = [{entries}]'


def generate_runtime_module(base_source: str, hooks: Sequence[HookDescriptor]) -> str:
    """Return ``base_source`` with the plugin literal placed at its injection point."""
    literal = render_plugins_literal(hooks)
    template = RuntimeModuleTemplate(base_source)

    spans = template.slot_spans()
    if len(spans) > 1:
        raise RuntimeTemplateError(f'Runtime template declares {len(spans)} plugin slots; expected at most one')
    if not spans:
        return f'{literal}\n{base_source}'
    # Only the slot is replaced; the rest of the template is kept byte for byte.
    start, end = spans[0]
    return base_source[:start] + literal + base_source[end:]
