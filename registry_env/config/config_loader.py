"""
Configuration Loader

Builds the default configuration layering and binds it to AppSettings:

1. settings YAML file (optional)
2. process environment variables (plus a local ``.env`` file)
3. persisted environment variables for the chosen target

Author: registry_env Project
License: MIT
"""

import os
from typing import Optional

from dotenv import load_dotenv

from .binder import bind
from .builder import ConfigurationBuilder, ConfigurationRoot
from .schema import AppSettings
from ..stores.base import EnvironmentStore, EnvironmentVariableTarget
from ..utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


class ConfigLoader:
    """
    Configuration loader and manager.

    Owns the ConfigurationRoot so that ``reload()`` re-reads every layer,
    including variables persisted after the process started.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        target: EnvironmentVariableTarget = EnvironmentVariableTarget.USER,
        prefix: Optional[str] = None,
        store: Optional[EnvironmentStore] = None,
        use_dotenv: bool = True,
        apply_logging: bool = True
    ):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to the settings YAML file. If None, uses default location.
            target: Which persisted variables to read (User or Machine)
            prefix: Prefix filter applied to persisted variables
            store: Store override for persisted variables
            use_dotenv: Load a ``.env`` file into the process environment first
            apply_logging: Configure package logging from the bound ``Logging`` section
        """
        self.config_path = config_path or os.getenv(
            "REGISTRY_ENV_SETTINGS",
            "appsettings.yaml"
        )
        self.target = target
        self.prefix = prefix
        self.store = store
        self.apply_logging = apply_logging
        self._configuration: Optional[ConfigurationRoot] = None
        self._settings: Optional[AppSettings] = None

        if use_dotenv:
            load_dotenv()

    def build(self) -> ConfigurationRoot:
        """
        Build and load the layered configuration.

        Raises:
            InvalidArgument: If the target is not supported
            LoadFailure: If a layer cannot be read
        """
        builder = (
            ConfigurationBuilder()
            .add_yaml_file(self.config_path, optional=True)
            .add_environment_variables()
            .add_registry_environment_variables(
                prefix=self.prefix, target=self.target, store=self.store
            )
        )
        self._configuration = builder.build()
        return self._configuration

    def load(self) -> AppSettings:
        """
        Build the configuration and bind it.

        Returns:
            Validated AppSettings object
        """
        configuration = self._configuration or self.build()
        self._settings = bind(configuration, AppSettings)
        self._configure_logging()
        return self._settings

    def reload(self) -> AppSettings:
        """
        Re-read every layer and rebind.

        Returns:
            Reloaded AppSettings object
        """
        if self._configuration is None:
            return self.load()
        self._configuration.reload()
        self._settings = bind(self._configuration, AppSettings)
        self._configure_logging()
        logger.info("Configuration reloaded")
        return self._settings

    def _configure_logging(self) -> None:
        """Apply the bound ``Logging`` section to the package logger."""
        if not self.apply_logging or self._settings is None:
            return
        options = self._settings.logging
        # defaults are not passed through use_enum_values
        level = getattr(options.log_level, "value", options.log_level)
        setup_logging(
            log_level=level,
            log_file_path=options.log_file_path,
            json_format=options.json_format
        )

    @property
    def configuration(self) -> Optional[ConfigurationRoot]:
        """The current configuration root."""
        return self._configuration

    @property
    def settings(self) -> Optional[AppSettings]:
        """The most recently bound settings."""
        return self._settings


def load_config(
    config_path: Optional[str] = None,
    target: EnvironmentVariableTarget = EnvironmentVariableTarget.USER,
    prefix: Optional[str] = None,
    store: Optional[EnvironmentStore] = None
) -> AppSettings:
    """
    Convenience function to load configuration.

    Returns:
        Loaded and validated AppSettings object
    """
    loader = ConfigLoader(config_path, target=target, prefix=prefix, store=store)
    return loader.load()
