"""
Configuration module for Teams Autojoin.
"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
