# plugins/__init__.py
from .api_runner import PluginApiRunner
from .hook_collector import BROWSER_HOOK, SSR_HOOK, collect_hooks
from .plugin_loader import LocalPluginLoader
from .runtime_module import generate_runtime_module

__all__ = ['PluginApiRunner', 'BROWSER_HOOK', 'SSR_HOOK', 'collect_hooks', 'LocalPluginLoader',
           'generate_runtime_module']
