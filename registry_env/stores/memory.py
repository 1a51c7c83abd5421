"""
In-memory environment store, used by tests and by hosts that already hold
the variables.

Author: registry_env Project
License: MIT
"""

from typing import Dict, Mapping, Optional

from .base import EnvironmentVariableTarget


class InMemoryEnvironmentStore:
    """Dictionary-backed store keyed by target."""

    def __init__(
        self,
        user: Optional[Mapping[str, Optional[str]]] = None,
        machine: Optional[Mapping[str, Optional[str]]] = None
    ):
        self._variables: Dict[EnvironmentVariableTarget, Dict[str, Optional[str]]] = {
            EnvironmentVariableTarget.USER: dict(user or {}),
            EnvironmentVariableTarget.MACHINE: dict(machine or {}),
        }

    def set(self, target: EnvironmentVariableTarget, key: str, value: Optional[str]) -> None:
        self._variables.setdefault(EnvironmentVariableTarget(target), {})[key] = value

    def remove(self, target: EnvironmentVariableTarget, key: str) -> None:
        self._variables.get(EnvironmentVariableTarget(target), {}).pop(key, None)

    def read(self, target: EnvironmentVariableTarget) -> Mapping[str, Optional[str]]:
        return dict(self._variables.get(EnvironmentVariableTarget(target), {}))
