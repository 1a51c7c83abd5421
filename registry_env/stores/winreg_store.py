"""
Windows Registry Store

Reads the persisted environment variables Windows keeps in the registry.
These are the variables set with ``setx`` or the System Properties dialog;
a running process only sees them after a restart, this store sees them
immediately.

Author: registry_env Project
License: MIT
"""

import sys
from typing import Dict, Mapping, Optional

from .base import EnvironmentVariableTarget
from ..utils.logger import get_logger

logger = get_logger(__name__)

USER_ENVIRONMENT_KEY = r"Environment"
MACHINE_ENVIRONMENT_KEY = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"

ERROR_NO_MORE_ITEMS = 259


class WindowsRegistryStore:
    """Enumerates ``HKCU\\Environment`` or the machine-wide environment key."""

    def __init__(self):
        if sys.platform != "win32":
            raise OSError("WindowsRegistryStore is only available on Windows")

    def read(self, target: EnvironmentVariableTarget) -> Mapping[str, Optional[str]]:
        import winreg

        target = EnvironmentVariableTarget(target)
        if target == EnvironmentVariableTarget.USER:
            hive, path = winreg.HKEY_CURRENT_USER, USER_ENVIRONMENT_KEY
        elif target == EnvironmentVariableTarget.MACHINE:
            hive, path = winreg.HKEY_LOCAL_MACHINE, MACHINE_ENVIRONMENT_KEY
        else:
            raise ValueError(f"No registry key for target {target.value}")

        variables: Dict[str, Optional[str]] = {}
        with winreg.OpenKey(hive, path, 0, winreg.KEY_READ) as key:
            index = 0
            while True:
                try:
                    name, value, value_type = winreg.EnumValue(key, index)
                except OSError as e:
                    if getattr(e, "winerror", None) == ERROR_NO_MORE_ITEMS:
                        break
                    raise
                index += 1

                converted = _value_to_str(winreg, value, value_type)
                if converted is _SKIP:
                    logger.debug(f"Skipping registry value {name!r} of type {value_type}")
                    continue
                variables[name] = converted

        logger.debug(f"Read {len(variables)} variables from registry ({target.value})")
        return variables


_SKIP = object()


def _value_to_str(winreg, value, value_type):
    """
    String form of a registry value.

    ``REG_EXPAND_SZ`` values are expanded against the current environment.
    List and binary values have no environment-variable form and are skipped.
    """
    if value is None:
        return None
    if value_type == winreg.REG_EXPAND_SZ:
        return winreg.ExpandEnvironmentStrings(value)
    if value_type == winreg.REG_SZ:
        return value
    if value_type in (winreg.REG_DWORD, winreg.REG_QWORD):
        return str(value)
    return _SKIP
