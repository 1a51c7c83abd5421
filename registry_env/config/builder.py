"""
Layered Configuration

ConfigurationBuilder collects sources; ConfigurationRoot merges the providers
they build. Later providers override earlier ones.

Author: registry_env Project
License: MIT
"""

from typing import List, Optional

from ..core.keys import CONNECTION_STRINGS_SECTION, KEY_DELIMITER, fold_case
from ..core.provider import ConfigurationProvider, ConfigurationSource
from ..utils.logger import get_logger

logger = get_logger(__name__)


def combine(*segments: str) -> str:
    """Join path segments with the key delimiter."""
    return KEY_DELIMITER.join(segments)


def _distinct_ignore_case(keys: List[str]) -> List[str]:
    seen = set()
    result = []
    for key in keys:
        folded = fold_case(key)
        if folded not in seen:
            seen.add(folded)
            result.append(key)
    return result


class ConfigurationBuilder:
    """Collects configuration sources in precedence order (lowest first)."""

    def __init__(self):
        self.sources: List[ConfigurationSource] = []

    def add(self, source: ConfigurationSource) -> "ConfigurationBuilder":
        self.sources.append(source)
        return self

    def add_yaml_file(self, path: str, optional: bool = True) -> "ConfigurationBuilder":
        from ..providers.yaml_file import YamlFileSource
        return self.add(YamlFileSource(path, optional))

    def add_environment_variables(self, prefix: Optional[str] = None) -> "ConfigurationBuilder":
        from ..providers.environment import EnvironmentVariablesSource
        return self.add(EnvironmentVariablesSource(prefix))

    def add_registry_environment_variables(self, *args, **kwargs) -> "ConfigurationBuilder":
        """See :func:`registry_env.providers.add_registry_environment_variables`."""
        from ..providers.registry_env import add_registry_environment_variables
        return add_registry_environment_variables(self, *args, **kwargs)

    def build(self) -> "ConfigurationRoot":
        """
        Build every provider and load it.

        Raises:
            LoadFailure: If any provider fails to load
        """
        providers = [source.build(self) for source in self.sources]
        return ConfigurationRoot(providers)


class ConfigurationRoot:
    """Merged, read-only view over a list of providers."""

    def __init__(self, providers: List[ConfigurationProvider]):
        self.providers = list(providers)
        for provider in self.providers:
            provider.load()
        logger.info(f"Configuration built from {len(self.providers)} providers")

    @property
    def path(self) -> str:
        return ""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Value for ``key`` from the last provider that has it."""
        for provider in reversed(self.providers):
            found, value = provider.try_get(key)
            if found:
                return value
        return default

    def __getitem__(self, key: str) -> Optional[str]:
        return self.get(key)

    def set(self, key: str, value: Optional[str]) -> None:
        """Write ``key`` to every provider."""
        if not self.providers:
            raise RuntimeError("Can't set a value without any configuration providers")
        for provider in self.providers:
            provider.set(key, value)

    def reload(self) -> None:
        for provider in self.providers:
            provider.load()

    def get_section(self, key: str) -> "ConfigurationSection":
        return ConfigurationSection(self, key)

    def get_children(self, path: Optional[str] = None) -> List["ConfigurationSection"]:
        keys: List[str] = []
        for provider in self.providers:
            keys = provider.get_child_keys(keys, path)
        return [
            self.get_section(key if path is None else combine(path, key))
            for key in _distinct_ignore_case(keys)
        ]

    def get_connection_string(self, name: str) -> Optional[str]:
        return self.get(combine(CONNECTION_STRINGS_SECTION, name))

    def as_dict(self) -> dict:
        """Flat dict of every key to its effective value."""
        merged = {}
        folded = {}
        for provider in self.providers:
            for key, value in provider.data.items():
                previous = folded.pop(fold_case(key), None)
                if previous is not None:
                    merged.pop(previous)
                folded[fold_case(key)] = key
                merged[key] = value
        return merged


class ConfigurationSection:
    """A sub-tree of a ConfigurationRoot."""

    def __init__(self, root: ConfigurationRoot, path: str):
        self.root = root
        self.path = path

    @property
    def key(self) -> str:
        """Last segment of the path."""
        return self.path.rsplit(KEY_DELIMITER, 1)[-1]

    @property
    def value(self) -> Optional[str]:
        return self.root.get(self.path)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.root.get(combine(self.path, key), default)

    def __getitem__(self, key: str) -> Optional[str]:
        return self.get(key)

    def get_section(self, key: str) -> "ConfigurationSection":
        return ConfigurationSection(self.root, combine(self.path, key))

    def get_children(self) -> List["ConfigurationSection"]:
        return self.root.get_children(self.path)

    def exists(self) -> bool:
        return self.value is not None or bool(self.get_children())

    def __repr__(self) -> str:
        return f"ConfigurationSection(path={self.path!r}, value={self.value!r})"
