"""
Configuration for dynview.
"""

from .layout import LayoutConfig, DEFAULT_LAYOUT_CONFIG
from .settings import Settings, get_settings, load_settings, reload_settings

__all__ = [
    "LayoutConfig",
    "DEFAULT_LAYOUT_CONFIG",
    "Settings",
    "get_settings",
    "load_settings",
    "reload_settings",
]
