"""
YAML File Provider

Loads a YAML settings file and flattens it into colon-delimited keys:

    NestedTest:
      NestedProperty1: a      ->  NestedTest:NestedProperty1 = "a"
    Hosts: [x, y]           ->  Hosts:0 = "x", Hosts:1 = "y"

Author: registry_env Project
License: MIT
"""

from pathlib import Path
from typing import Any, Optional

import yaml

from ..core.errors import LoadFailure
from ..core.keys import CaseInsensitiveDict, KEY_DELIMITER
from ..core.provider import ConfigurationProvider, ConfigurationSource
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _scalar_to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten(node: Any, data: CaseInsensitiveDict, path: str = "") -> CaseInsensitiveDict:
    """Flatten nested mappings/lists into ``data`` under ``path``."""
    if isinstance(node, dict):
        for key, child in node.items():
            child_path = f"{path}{KEY_DELIMITER}{key}" if path else str(key)
            flatten(child, data, child_path)
    elif isinstance(node, list):
        for index, child in enumerate(node):
            child_path = f"{path}{KEY_DELIMITER}{index}" if path else str(index)
            flatten(child, data, child_path)
    elif path:
        data[path] = _scalar_to_str(node)
    return data


class YamlFileProvider(ConfigurationProvider):
    """Settings from a YAML file."""

    def __init__(self, path: str, optional: bool = True):
        super().__init__()
        self.path = Path(path)
        self.optional = optional

    def load(self) -> None:
        """
        Parse the file and publish its flattened keys.

        Raises:
            LoadFailure: If a required file is missing or the YAML is invalid
        """
        if not self.path.exists():
            if self.optional:
                logger.debug(f"Optional settings file not found: {self.path}")
                self._publish(CaseInsensitiveDict())
                return
            raise LoadFailure(
                f"The configuration file '{self.path}' was not found and is not optional."
            ) from FileNotFoundError(str(self.path))

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to parse YAML config {self.path}: {e}")
            raise LoadFailure(f"Failed to parse YAML config '{self.path}': {e}") from e

        if not isinstance(document, dict):
            raise LoadFailure(
                f"Top-level YAML node in '{self.path}' must be a mapping, got {type(document).__name__}"
            )

        data = flatten(document, CaseInsensitiveDict())
        self._publish(data)
        logger.debug(f"Loaded {len(data)} keys from {self.path}")

    def __str__(self) -> str:
        return f"{type(self).__name__} for '{self.path}' ({'Optional' if self.optional else 'Required'})"


class YamlFileSource(ConfigurationSource):
    """A YAML settings file as a configuration source."""

    def __init__(self, path: str, optional: bool = True):
        self.path = path
        self.optional = optional

    def build(self, builder) -> YamlFileProvider:
        return YamlFileProvider(self.path, self.optional)
