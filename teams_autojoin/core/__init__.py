"""
Core module exports.
"""

from .exceptions import (
    TeamsAutomationException,
    ConfigurationError,
    BrowserLaunchError,
    TeamSelectionError,
)
from .logging import get_logger, setup_logging

__all__ = [
    "TeamsAutomationException",
    "ConfigurationError",
    "BrowserLaunchError",
    "TeamSelectionError",
    "get_logger",
    "setup_logging",
]
