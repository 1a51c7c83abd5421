"""
Process environment variables provider (``os.environ``), using the same key
conventions as the registry provider.

Author: registry_env Project
License: MIT
"""

import os
from typing import Mapping, Optional

from ..core.keys import build_config_map, normalize
from ..core.provider import ConfigurationProvider, ConfigurationSource
from ..utils.logger import get_logger

logger = get_logger(__name__)


class EnvironmentVariablesProvider(ConfigurationProvider):
    """Reads variables inherited by the current process."""

    def __init__(
        self,
        prefix: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        super().__init__()
        self.prefix = prefix or ""
        self._normalized_prefix = normalize(self.prefix)
        self._environ = environ

    def load(self) -> None:
        environ = os.environ if self._environ is None else self._environ
        data = build_config_map(list(environ.items()), self._normalized_prefix)
        self._publish(data)
        logger.debug(f"Loaded {len(data)} keys from process environment")

    def __str__(self) -> str:
        s = type(self).__name__
        if self.prefix:
            s += f" Prefix: '{self.prefix}'"
        return s


class EnvironmentVariablesSource(ConfigurationSource):
    """Process environment variables as a configuration source."""

    def __init__(self, prefix: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        self.prefix = prefix
        self.environ = environ

    def build(self, builder) -> EnvironmentVariablesProvider:
        return EnvironmentVariablesProvider(self.prefix, self.environ)
