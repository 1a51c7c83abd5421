"""
registry_env

Configuration provider over persisted (registry-stored) environment variables,
with Azure connection-string prefix handling and ``__`` nesting.

Author: registry_env Project
License: MIT
"""

from .config import ConfigurationBuilder, ConfigLoader, bind, load_config
from .core import InvalidArgument, LoadFailure, RegistryEnvError
from .providers import (
    RegistryEnvironmentVariablesProvider,
    RegistryEnvironmentVariablesSource,
    add_registry_environment_variables,
)
from .stores import EnvironmentVariableTarget

__version__ = "0.1.0"
__all__ = [
    'ConfigurationBuilder',
    'ConfigLoader',
    'bind',
    'load_config',
    'InvalidArgument',
    'LoadFailure',
    'RegistryEnvError',
    'RegistryEnvironmentVariablesProvider',
    'RegistryEnvironmentVariablesSource',
    'add_registry_environment_variables',
    'EnvironmentVariableTarget',
]
