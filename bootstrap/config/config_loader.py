from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from core.exceptions import ConfigurationError
from domain.site_config import SiteConfig
from .config_utils import ConfigMerger, expand_environment_variables

logger = logging.getLogger(__name__)

SITE_CONFIG_FILE = 'site-config.yaml'


class SiteConfigLoader:
    """
    Loads ``site-config.yaml`` from a site directory.

    Layering, lowest to highest precedence:
      1. ``site-config.yaml``
      2. ``site-config.<env>.yaml`` when an environment is given and the file exists
      3. environment variable expansion (``${VAR:-default}``)
    The result is validated as a ``SiteConfig``. Any failure is a
    ``ConfigurationError``: a site without a usable configuration cannot be built.
    """

    def __init__(self, env: Optional[str] = None, file_name: str = SITE_CONFIG_FILE):
        self.env = env
        self.file_name = file_name

    def config_path(self, root_directory: str | Path) -> Path:
        return Path(root_directory) / self.file_name

    def env_config_path(self, root_directory: str | Path) -> Optional[Path]:
        if not self.env or self.env == 'default':
            return None
        stem, _, suffix = self.file_name.rpartition('.')
        return Path(root_directory) / f'{stem}.{self.env}.{suffix}'

    def load(self, root_directory: str | Path) -> SiteConfig:
        path = self.config_path(root_directory)
        logger.info(f"Loading site configuration from {path} (env='{self.env or 'default'}')")

        if not path.is_file():
            raise ConfigurationError(f"Couldn't open your {self.file_name} file", config_path=str(path))

        data = self._read_yaml(path)
        env_path = self.env_config_path(root_directory)
        if env_path is not None and env_path.is_file():
            data = ConfigMerger.merge(data, self._read_yaml(env_path), f'{self.file_name}_env_{self.env}')
            logger.debug(f'Applied environment overlay {env_path}')

        data = expand_environment_variables(data)

        try:
            config = SiteConfig.model_validate(data)
        except ValidationError as e:
            errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            raise ConfigurationError(f'Invalid {self.file_name}', config_path=str(path), errors=errors) from e

        logger.info(f'✓ Site configuration loaded ({len(config.plugins)} plugin entr{"y" if len(config.plugins) == 1 else "ies"})')
        return config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f'Error parsing YAML: {e}', config_path=str(path)) from e
        except OSError as e:
            raise ConfigurationError(f'Unable to read configuration: {e}', config_path=str(path)) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f'Top-level YAML object must be a mapping, found {type(data).__name__}',
                config_path=str(path),
            )
        return data
