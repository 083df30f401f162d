# domain/ports/config_loader_port.py
from __future__ import annotations

from typing import Awaitable, Protocol, Union, runtime_checkable

from domain.site_config import SiteConfig


@runtime_checkable
class ConfigLoaderPort(Protocol):
    """
    Loads the site configuration for a site directory.

    Implementations raise ``bootstrap.exceptions.ConfigurationError`` when the
    configuration is missing or invalid.
    """

    def load(self, root_directory: str) -> Union[SiteConfig, Awaitable[SiteConfig]]: ...
