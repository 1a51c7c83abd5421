"""
Configuration Schema and Models

Pydantic models for the settings an application binds from the layered
configuration, and for the tool's own logging options.

Author: registry_env Project
License: MIT
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging options, bound from the ``Logging`` section."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        alias="LogLevel",
        description="Package logging level"
    )
    log_file_path: Optional[str] = Field(
        default=None,
        alias="LogFilePath",
        description="Rotating log file (None logs to the console only)"
    )
    json_format: bool = Field(
        default=False,
        alias="JsonFormat",
        description="Emit JSON log records"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


class NestedTestSettings(BaseModel):
    """Nested settings section."""

    model_config = ConfigDict(populate_by_name=True)

    nested_property1: Optional[str] = Field(default=None, alias="NestedProperty1")
    nested_property2: Optional[str] = Field(default=None, alias="NestedProperty2")


class AppSettings(BaseModel):
    """
    Root application settings.

    Bound from every configuration layer, lowest precedence first:
    1. settings YAML file
    2. process environment variables
    3. persisted (registry) environment variables
    """

    model_config = ConfigDict(populate_by_name=True)

    property1: Optional[str] = Field(default=None, alias="Property1")
    nested_test: NestedTestSettings = Field(
        default_factory=NestedTestSettings,
        alias="NestedTest"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, alias="Logging")
