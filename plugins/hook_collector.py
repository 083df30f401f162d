# plugins/hook_collector.py
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from domain.plugins import HookDescriptor, PluginDescriptor
from domain.ports.file_probe_port import FileProbePort

logger = logging.getLogger(__name__)

BROWSER_HOOK = 'browser'
SSR_HOOK = 'ssr'


def hook_file_pattern(hook_kind: str) -> str:
    return f'gatsby-{hook_kind}*'


def find_hook_file(hook_kind: str, plugin: PluginDescriptor, file_probe: FileProbePort) -> Optional[str]:
    matches = file_probe.find_matching(plugin.resolve_path, hook_file_pattern(hook_kind))
    return matches[0] if matches else None


def collect_hooks(hook_kind: str, plugins: Sequence[PluginDescriptor], file_probe: FileProbePort) -> List[HookDescriptor]:
    """
    Return one descriptor per plugin that ships a ``gatsby-<hook_kind>*`` file.

    Plugin declaration order is the composition order of the generated
    runtime, so the result keeps the input order exactly.
    """
    descriptors = [
        HookDescriptor(hook_file_path=find_hook_file(hook_kind, plugin, file_probe), options=plugin.options)
        for plugin in plugins
    ]
    hooks = [d for d in descriptors if d.is_implemented]
    logger.debug(f"{len(hooks)}/{len(plugins)} plugin(s) implement the '{hook_kind}' hook")
    return hooks
