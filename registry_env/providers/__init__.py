"""
Configuration Providers

Author: registry_env Project
License: MIT
"""

from .environment import EnvironmentVariablesProvider, EnvironmentVariablesSource
from .registry_env import (
    RegistryEnvironmentVariablesProvider,
    RegistryEnvironmentVariablesSource,
    add_registry_environment_variables,
)
from .yaml_file import YamlFileProvider, YamlFileSource

__all__ = [
    'EnvironmentVariablesProvider',
    'EnvironmentVariablesSource',
    'RegistryEnvironmentVariablesProvider',
    'RegistryEnvironmentVariablesSource',
    'add_registry_environment_variables',
    'YamlFileProvider',
    'YamlFileSource',
]
