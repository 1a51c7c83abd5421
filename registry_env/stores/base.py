"""
Environment Store Port

A store enumerates persisted environment variables for one target
(the current user or the whole machine).

Author: registry_env Project
License: MIT
"""

from enum import Enum
from typing import Mapping, Optional, Protocol


class EnvironmentVariableTarget(str, Enum):
    """Where environment variables are stored."""
    PROCESS = "Process"
    USER = "User"
    MACHINE = "Machine"


class EnvironmentStore(Protocol):
    """Read-only access to persisted environment variables."""

    def read(self, target: EnvironmentVariableTarget) -> Mapping[str, Optional[str]]:
        """Return every variable stored for *target*; may raise on failure."""
