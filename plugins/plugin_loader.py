# plugins/plugin_loader.py
from __future__ import annotations

import importlib.util
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from core.exceptions import PluginLoadError
from domain.plugins import PluginDescriptor
from domain.site_config import PluginSpec, SiteConfig

logger = logging.getLogger(__name__)

SITE_PLUGIN_NAME = 'default-site-plugin'
LOCAL_PLUGINS_DIR = 'plugins'


class LocalPluginLoader:
    """
    Resolves the plugins declared in the site configuration.

    A plugin name is looked up, in order, as an absolute path, as a
    directory under ``<site>/plugins/`` and as an importable package.
    Plugins declared in ``options.plugins`` follow their parent. The site
    itself is appended last so its own hook files take part like any other
    plugin.
    """

    def __init__(self, root_directory: Union[str, Path], include_site_plugin: bool = True):
        self.root_directory = Path(root_directory)
        self.include_site_plugin = include_site_plugin

    def load(self, site_config: SiteConfig) -> List[PluginDescriptor]:
        flattened: List[PluginDescriptor] = []
        for entry in site_config.plugins:
            self._flatten(entry, flattened)

        if self.include_site_plugin:
            flattened.append(PluginDescriptor(
                name=SITE_PLUGIN_NAME,
                resolve_path=self.root_directory.resolve().as_posix(),
                options={'plugins': []},
            ))

        logger.info(f'Loaded {len(flattened)} plugin(s): {[p.name for p in flattened]}')
        return flattened

    def _flatten(self, entry: Union[str, PluginSpec, Dict[str, Any]], out: List[PluginDescriptor]) -> None:
        spec = self._as_spec(entry)
        plugin = self.resolve(spec)
        out.append(plugin)
        for child in spec.options.get('plugins', None) or []:
            self._flatten(child, out)

    @staticmethod
    def _as_spec(entry: Union[str, PluginSpec, Dict[str, Any]]) -> PluginSpec:
        if isinstance(entry, PluginSpec):
            return entry
        if isinstance(entry, str):
            return PluginSpec(resolve=entry)
        if isinstance(entry, dict):
            try:
                return PluginSpec.model_validate(entry)
            except ValueError as e:
                raise PluginLoadError(f'Invalid plugin entry {entry!r}: {e}') from e
        raise PluginLoadError(f'Unsupported plugin entry {entry!r}')

    def resolve(self, spec: PluginSpec) -> PluginDescriptor:
        directory = self._resolve_directory(spec.resolve)
        if directory is None:
            raise PluginLoadError(
                f"Unable to find plugin '{spec.resolve}'. Looked in {self.root_directory / LOCAL_PLUGINS_DIR} "
                f"and the import path.",
                plugin_name=spec.resolve,
            )
        logger.debug(f"Resolved plugin '{spec.resolve}' -> {directory}")
        return PluginDescriptor(
            name=spec.resolve,
            resolve_path=directory.as_posix(),
            options=dict(spec.options),
            version=self._read_version(directory),
        )

    def _resolve_directory(self, name: str) -> Optional[Path]:
        candidate = Path(name)
        if candidate.is_absolute():
            return candidate if candidate.is_dir() else None

        local = self.root_directory / LOCAL_PLUGINS_DIR / name
        if local.is_dir():
            return local.resolve()

        try:
            found = importlib.util.find_spec(name.replace('-', '_'))
        except (ImportError, ValueError):
            found = None
        if found is not None and found.submodule_search_locations:
            return Path(list(found.submodule_search_locations)[0]).resolve()
        return None

    @staticmethod
    def _read_version(directory: Path) -> Optional[str]:
        manifest = directory / 'package.json'
        if not manifest.is_file():
            return None
        try:
            return json.loads(manifest.read_text(encoding='utf-8')).get('version')
        except (OSError, ValueError) as e:
            logger.warning(f'Could not read plugin manifest {manifest}: {e}')
            return None
