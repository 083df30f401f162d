# bootstrap/config/__init__.py
"""
Bootstrap Configuration Module

Program configuration for a run and loading of the site configuration files.
"""

from .bootstrap_config import BootstrapConfig
from .config_loader import SiteConfigLoader
from .config_utils import ConfigMerger

__all__ = ['BootstrapConfig', 'SiteConfigLoader', 'ConfigMerger']
