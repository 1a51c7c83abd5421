"""
Dotenv File Store

Persisted per-user / machine-wide variables on platforms without a registry:
one ``.env`` file per target, parsed with python-dotenv. A bare ``KEY`` line
(no ``=``) yields a None value.

Author: registry_env Project
License: MIT
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from .base import EnvironmentVariableTarget
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USER_FILE = "~/.config/registry_env/user.env"
DEFAULT_MACHINE_FILE = "/etc/registry_env/machine.env"


class DotenvFileStore:
    """Reads one dotenv file per target."""

    def __init__(
        self,
        user_path: Optional[str] = None,
        machine_path: Optional[str] = None,
        missing_ok: bool = True
    ):
        """
        Args:
            user_path: File for the User target (env REGISTRY_ENV_USER_FILE)
            machine_path: File for the Machine target (env REGISTRY_ENV_MACHINE_FILE)
            missing_ok: Treat a missing file as an empty store instead of an error
        """
        self.user_path = Path(
            user_path or os.getenv("REGISTRY_ENV_USER_FILE", DEFAULT_USER_FILE)
        ).expanduser()
        self.machine_path = Path(
            machine_path or os.getenv("REGISTRY_ENV_MACHINE_FILE", DEFAULT_MACHINE_FILE)
        ).expanduser()
        self.missing_ok = missing_ok

    def path_for(self, target: EnvironmentVariableTarget) -> Path:
        target = EnvironmentVariableTarget(target)
        if target == EnvironmentVariableTarget.USER:
            return self.user_path
        if target == EnvironmentVariableTarget.MACHINE:
            return self.machine_path
        raise ValueError(f"No dotenv file for target {target.value}")

    def read(self, target: EnvironmentVariableTarget) -> Mapping[str, Optional[str]]:
        path = self.path_for(target)
        if not path.is_file():
            if self.missing_ok:
                logger.debug(f"Dotenv file not found, treating as empty: {path}")
                return {}
            raise FileNotFoundError(f"Environment file not found: {path}")

        values = dotenv_values(path, interpolate=False)
        logger.debug(f"Read {len(values)} variables from {path}")
        return dict(values)
