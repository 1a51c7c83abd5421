"""
Registry Environment Variables Provider

Loads persisted (registry-stored) environment variables for the current user
or the whole machine. Unlike ``os.environ`` these reflect changes made after
the process started.

Author: registry_env Project
License: MIT
"""

from typing import Optional

from ..core.errors import InvalidArgument, LoadFailure
from ..core.keys import build_config_map, normalize
from ..core.provider import ConfigurationProvider, ConfigurationSource
from ..stores.base import EnvironmentStore, EnvironmentVariableTarget
from ..utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_TARGETS = (EnvironmentVariableTarget.MACHINE, EnvironmentVariableTarget.USER)


class RegistryEnvironmentVariablesProvider(ConfigurationProvider):
    """
    Configuration provider over persisted environment variables.

    Variable names use ``__`` for nesting. Azure connection-string prefixes
    (``MYSQLCONNSTR_``, ``SQLCONNSTR_``, ...) are mapped under
    ``ConnectionStrings:``.
    """

    def __init__(
        self,
        target: EnvironmentVariableTarget,
        prefix: Optional[str] = None,
        store: Optional[EnvironmentStore] = None
    ):
        """
        Args:
            target: EnvironmentVariableTarget.MACHINE or EnvironmentVariableTarget.USER
            prefix: Only keep variables starting with this prefix (stripped)
            store: Store to enumerate; platform default when None

        Raises:
            InvalidArgument: If target is not Machine or User
        """
        super().__init__()
        if target not in SUPPORTED_TARGETS:
            raise InvalidArgument(
                "Only Machine and User targets are supported for registry-based environment variables.",
                "target"
            )

        self.target = EnvironmentVariableTarget(target)
        self.prefix = prefix or ""
        self._normalized_prefix = normalize(self.prefix)
        self._store = store

    @property
    def store(self) -> EnvironmentStore:
        if self._store is None:
            from ..stores import default_store
            self._store = default_store()
        return self._store

    def load(self) -> None:
        """
        Read the store and publish a new ConfigMap.

        Raises:
            LoadFailure: If the store cannot be read; the previous data is kept
        """
        try:
            variables = self.store.read(self.target)
            entries = list(variables.items())
        except Exception as e:
            logger.error(f"Failed to read environment variables ({self.target.value}): {e}")
            raise LoadFailure(
                f"Failed to read environment variables from registry target '{self.target.value}'.",
                target=self.target.value
            ) from e

        data = build_config_map(entries, self._normalized_prefix)
        self._publish(data)
        logger.debug(
            f"Loaded {len(data)} keys from {len(entries)} variables ({self.target.value})"
        )

    def __str__(self) -> str:
        s = type(self).__name__
        if self.prefix:
            s += f" Prefix: '{self.prefix}'"
        return s


class RegistryEnvironmentVariablesSource(ConfigurationSource):
    """Registry environment variables as a configuration source."""

    def __init__(
        self,
        target: EnvironmentVariableTarget = EnvironmentVariableTarget.MACHINE,
        prefix: Optional[str] = None,
        store: Optional[EnvironmentStore] = None
    ):
        self.target = target
        self.prefix = prefix
        self.store = store

    def build(self, builder) -> RegistryEnvironmentVariablesProvider:
        return RegistryEnvironmentVariablesProvider(self.target, self.prefix, self.store)


def add_registry_environment_variables(
    builder,
    prefix: Optional[str] = None,
    target: EnvironmentVariableTarget = EnvironmentVariableTarget.MACHINE,
    configure_source=None,
    store: Optional[EnvironmentStore] = None
):
    """
    Add registry environment variables to a ConfigurationBuilder.

    Args:
        builder: ConfigurationBuilder to add to
        prefix: Only include variables starting with this prefix
        target: Machine (default) or User
        configure_source: Optional callable receiving the source for custom setup
        store: Store override

    Returns:
        The builder, for chaining
    """
    source = RegistryEnvironmentVariablesSource(target=target, prefix=prefix, store=store)
    if configure_source is not None:
        configure_source(source)
    return builder.add(source)
