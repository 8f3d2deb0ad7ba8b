"""
Meeting handler module.

Browser automation for Microsoft Teams: persistent session, login, team
selection and the join/pre-join watchers.
"""

from .auto_login import maybe_auto_login
from .locator import LocatedElements, click_first_actionable, click_when_ready, find_and_click, locate
from .poller import (
    PollConfig,
    poll_surfaces_until_clicked,
    poll_until_clicked,
    wait_and_click_join,
    wait_and_click_prejoin,
)
from .session import ProfileManager, TeamsSession
from .team_selector import (
    ensure_on_teams_hub,
    find_team_match,
    list_teams,
    select_team,
    wait_for_teams_list,
)
from .teams_selectors import TEAMS_SELECTORS, get_selectors_for

__all__ = [
    "maybe_auto_login",
    "LocatedElements",
    "click_first_actionable",
    "click_when_ready",
    "find_and_click",
    "locate",
    "PollConfig",
    "poll_surfaces_until_clicked",
    "poll_until_clicked",
    "wait_and_click_join",
    "wait_and_click_prejoin",
    "ProfileManager",
    "TeamsSession",
    "ensure_on_teams_hub",
    "find_team_match",
    "list_teams",
    "select_team",
    "wait_for_teams_list",
    "TEAMS_SELECTORS",
    "get_selectors_for",
]
