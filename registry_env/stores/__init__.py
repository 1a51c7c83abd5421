"""
Environment Store Adapters

Author: registry_env Project
License: MIT
"""

import sys

from .base import EnvironmentStore, EnvironmentVariableTarget
from .dotenv_store import DotenvFileStore
from .memory import InMemoryEnvironmentStore
from .winreg_store import WindowsRegistryStore


def default_store() -> EnvironmentStore:
    """Registry on Windows, dotenv files everywhere else."""
    if sys.platform == "win32":
        return WindowsRegistryStore()
    return DotenvFileStore()


__all__ = [
    'EnvironmentStore',
    'EnvironmentVariableTarget',
    'DotenvFileStore',
    'InMemoryEnvironmentStore',
    'WindowsRegistryStore',
    'default_store',
]
