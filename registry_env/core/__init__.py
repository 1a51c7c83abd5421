"""
registry_env Core Module

Key conventions, the provider base class and the exception hierarchy.

Author: registry_env Project
License: MIT
"""

from .errors import RegistryEnvError, InvalidArgument, LoadFailure
from .keys import (
    CONNECTION_STRING_RULES,
    KEY_DELIMITER,
    CaseInsensitiveDict,
    PrefixRule,
    build_config_map,
    classify,
    normalize,
)
from .provider import ConfigurationProvider, ConfigurationSource

__all__ = [
    'RegistryEnvError',
    'InvalidArgument',
    'LoadFailure',
    'CONNECTION_STRING_RULES',
    'KEY_DELIMITER',
    'CaseInsensitiveDict',
    'PrefixRule',
    'build_config_map',
    'classify',
    'normalize',
    'ConfigurationProvider',
    'ConfigurationSource',
]
