"""
Exception hierarchy for registry_env.

Author: registry_env Project
License: MIT
"""

from typing import Optional


class RegistryEnvError(Exception):
    """Base class for all registry_env errors."""


class InvalidArgument(RegistryEnvError, ValueError):
    """A constructor argument has an unsupported value."""

    def __init__(self, message: str, param_name: str):
        super().__init__(f"{message} (Parameter '{param_name}')")
        self.param_name = param_name


class LoadFailure(RegistryEnvError, RuntimeError):
    """Reading a configuration source failed; nothing was published."""

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.target = target
