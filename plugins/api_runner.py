# plugins/api_runner.py
from __future__ import annotations

import importlib.util
import inspect
import logging
import re
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, List, Optional, Sequence

from domain.plugins import PluginDescriptor

logger = logging.getLogger(__name__)

NODE_API_FILE = 'gatsby-node.py'


class PluginApiRunner:
    """
    Broadcasts build-time events to every plugin's ``gatsby-node.py``.

    A plugin takes part in an event by defining a function of the same name,
    called as ``handler(args, plugin_options)``. Handlers may be coroutines.
    Non-``None`` return values are collected in plugin order. Exceptions
    raised by a handler are not caught.
    """

    def __init__(self, plugins: Sequence[PluginDescriptor]):
        self.plugins = list(plugins)
        self._modules: Dict[str, Optional[ModuleType]] = {}

    def node_module(self, plugin: PluginDescriptor) -> Optional[ModuleType]:
        if plugin.resolve_path in self._modules:
            return self._modules[plugin.resolve_path]

        api_file = Path(plugin.resolve_path) / NODE_API_FILE
        module = None
        if api_file.is_file():
            module_name = 'site_plugin_' + re.sub(r'\W', '_', plugin.name)
            spec = importlib.util.spec_from_file_location(module_name, api_file)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
            logger.debug(f"Loaded node API for plugin '{plugin.name}' from {api_file}")
        self._modules[plugin.resolve_path] = module
        return module

    def implementers(self, event_name: str) -> List[PluginDescriptor]:
        result = []
        for plugin in self.plugins:
            module = self.node_module(plugin)
            if module is not None and callable(getattr(module, event_name, None)):
                result.append(plugin)
        return result

    async def broadcast(self, event_name: str, payload: Optional[Dict[str, Any]] = None) -> List[Any]:
        implementers = self.implementers(event_name)
        logger.info(f"Running '{event_name}' for {len(implementers)} plugin(s)")

        results: List[Any] = []
        for plugin in implementers:
            handler = getattr(self.node_module(plugin), event_name)
            args = {**(payload or {}), 'plugin': plugin}
            value = handler(args, dict(plugin.options))
            if inspect.isawaitable(value):
                value = await value
            if value is not None:
                results.append(value)
        return results
