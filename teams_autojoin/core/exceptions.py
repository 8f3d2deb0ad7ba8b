"""
Custom exceptions for Teams Autojoin.
"""

from typing import Any, Dict, Optional


class TeamsAutomationException(Exception):
    """Base exception for Teams Autojoin errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(TeamsAutomationException):
    """Raised when configuration is invalid."""
    pass


class BrowserLaunchError(TeamsAutomationException):
    """Raised when the persistent browser session cannot be started."""
    pass


class TeamSelectionError(TeamsAutomationException):
    """Raised when the teams list cannot be found or read."""
    pass
