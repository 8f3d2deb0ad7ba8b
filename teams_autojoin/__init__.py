"""
Teams Autojoin.

Opens Microsoft Teams in a persistent Chromium profile, lists and opens teams,
and watches for meeting "Join" / "Join now" buttons.
"""

__version__ = "0.1.0"
