"""
Shared utilities (logging).

Author: registry_env Project
License: MIT
"""

from .logger import setup_logging, get_logger

__all__ = ['setup_logging', 'get_logger']
