"""
registry_env Configuration Module

Layered configuration (builder, root, sections), typed binding onto pydantic
models, and the default loader.

Author: registry_env Project
License: MIT
"""

from .binder import bind
from .builder import ConfigurationBuilder, ConfigurationRoot, ConfigurationSection
from .config_loader import ConfigLoader, load_config
from .schema import AppSettings, LoggingConfig, NestedTestSettings

__all__ = [
    'bind',
    'ConfigurationBuilder',
    'ConfigurationRoot',
    'ConfigurationSection',
    'ConfigLoader',
    'load_config',
    'AppSettings',
    'LoggingConfig',
    'NestedTestSettings',
]
