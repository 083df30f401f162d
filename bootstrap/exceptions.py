"""
Public bootstrap exception re-exports.

Import your exceptions like:
    from bootstrap.exceptions import BootstrapError, ConfigurationError, ...
The actual definitions live in core.exceptions so that pages, plugins and
infrastructure modules can raise them without importing the bootstrap.
"""
from core.exceptions import *  # noqa: F401,F403
from core.exceptions import __all__  # noqa: F401
