"""
Storage Layer.

This package handles all data persistence: the INI settings file and the
local cache of imported demos.
"""

from .cache import DemoCache
from .config_manager import ConfigManager

__all__ = ["ConfigManager", "DemoCache"]
