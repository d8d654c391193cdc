"""Configuration objects for a digiVIT acquisition run.

Runs are described by an immutable :class:`SessionConfig`; defaults may come
from a small YAML file (see :func:`load_defaults`) and the output directory
from :class:`AppPaths`.
"""

from .app_config import DEFAULT_SENSOR_ADDRESS, AppPaths
from .session import ConfigError, SessionConfig, load_defaults

__all__ = [
    "AppPaths",
    "ConfigError",
    "DEFAULT_SENSOR_ADDRESS",
    "SessionConfig",
    "load_defaults",
]
