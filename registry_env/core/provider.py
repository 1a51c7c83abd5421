"""
Configuration Provider Base

A provider owns one published ConfigMap. ``load()`` builds a new map and
swaps it in as a whole, so readers always see a complete map.

Author: registry_env Project
License: MIT
"""

from abc import ABC, abstractmethod
from threading import Lock
from typing import Callable, Iterable, List, Optional, Tuple

from .keys import CaseInsensitiveDict, KEY_DELIMITER, starts_with_ignore_case
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ConfigurationProvider:
    """
    Holds configuration key/values for one source.

    Subclasses implement ``load()`` and hand the finished map to ``_publish()``.
    """

    def __init__(self):
        self._data = CaseInsensitiveDict()
        self._publish_lock = Lock()
        self._reload_callbacks: List[Callable[["ConfigurationProvider"], None]] = []

    @property
    def data(self) -> CaseInsensitiveDict:
        """The currently published map. Treat as read-only."""
        return self._data

    def load(self) -> None:
        """Load (or reload) data for this provider."""

    def get(self, key: str) -> Optional[str]:
        """Case-insensitive lookup; None when missing."""
        return self._data.get(key)

    def try_get(self, key: str) -> Tuple[bool, Optional[str]]:
        """
        Look up a key, distinguishing a missing key from a None value.

        Returns:
            Tuple of (found, value)
        """
        data = self._data
        if key in data:
            return True, data[key]
        return False, None

    def set(self, key: str, value: Optional[str]) -> None:
        """Set a single value (copy-on-write)."""
        with self._publish_lock:
            data = self._data.copy()
            data[key] = value
            self._data = data

    def get_child_keys(
        self,
        earlier_keys: Iterable[str],
        parent_path: Optional[str] = None
    ) -> List[str]:
        """
        Return the immediate child segments under ``parent_path``, merged with
        ``earlier_keys`` and sorted case-insensitively.

        Args:
            earlier_keys: Child keys returned by earlier providers
            parent_path: Section path, or None for the top level
        """
        keys = list(earlier_keys)
        prefix = "" if parent_path is None else parent_path + KEY_DELIMITER

        for key in self._data:
            if not starts_with_ignore_case(key, prefix):
                continue
            rest = key[len(prefix):]
            keys.append(rest.split(KEY_DELIMITER, 1)[0])

        keys.sort(key=str.casefold)
        return keys

    def on_reload(self, callback: Callable[["ConfigurationProvider"], None]) -> None:
        """Register a callback invoked after every successful publish."""
        self._reload_callbacks.append(callback)

    def _publish(self, data: CaseInsensitiveDict) -> None:
        """Replace the published map in a single reference swap."""
        with self._publish_lock:
            self._data = data

        for callback in list(self._reload_callbacks):
            callback(self)

    def __str__(self) -> str:
        return type(self).__name__


class ConfigurationSource(ABC):
    """Describes a configuration source and builds its provider."""

    @abstractmethod
    def build(self, builder) -> ConfigurationProvider:
        """
        Build the provider for this source.

        Args:
            builder: The ConfigurationBuilder the source was added to
        """
