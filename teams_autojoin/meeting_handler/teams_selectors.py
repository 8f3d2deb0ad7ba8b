"""
Microsoft Teams-specific DOM selectors.

This module centralizes all Teams UI selectors used for:
- Login form auto-fill
- Teams hub navigation and team listing
- Meeting join flow (channel banner "Join" and pre-join "Join now")

Each entry is an ordered selector set: earlier selectors are tried first and
the first one that matches anything wins.

Note: Teams UI is frequently updated by Microsoft, so selectors may need
periodic maintenance. Labels are listed in both English and Russian.
"""

# =============================================================================
# DOM SELECTORS
# =============================================================================

TEAMS_SELECTORS = {
    # -------------------------------------------------------------------------
    # Login Selectors (login.microsoftonline.com)
    # -------------------------------------------------------------------------

    "login_email": [
        'input[type="email"]',
        'input[name="loginfmt"]',
    ],

    "login_password": [
        'input[type="password"]',
        'input[name="passwd"]',
    ],

    # "Stay signed in?" prompt, prefer "Yes" to keep the session alive
    "stay_signed_in": [
        'button:has-text("Yes")',
        'input[type="submit"][value="Yes"]',
    ],

    # -------------------------------------------------------------------------
    # Navigation Selectors
    # -------------------------------------------------------------------------

    # Left app bar "Teams" button
    "teams_hub_button": [
        '[data-tid="app-bar-teams"]',
        'button[aria-label="Teams"]',
        'button[aria-label="Команды"]',
        'a[aria-label="Teams"]',
        'a[aria-label="Команды"]',
    ],

    # Team entries in the teams list
    "team_name": [
        'button[data-testid="team-name"]',
    ],

    # Anything that looks like a populated tree when team-name buttons are absent
    "team_list_fallback": [
        '[role="treeitem"][aria-label]',
        'button[aria-label]',
    ],

    # -------------------------------------------------------------------------
    # Join Flow Selectors
    # -------------------------------------------------------------------------

    # Ongoing meeting banner in a channel
    "join_button": [
        'button[data-tid="channel-ongoing-meeting-banner-join-button"]',
        'button[aria-label*="Присоединиться"]',
        'button:has-text("Присоединиться")',
        'button[aria-label*="Join"]',
        'button:has-text("Join")',
    ],

    # Pre-join screen confirmation
    "prejoin_join_button": [
        '#prejoin-join-button',
        'button#prejoin-join-button',
        'button[data-tid="prejoin-join-button"]',
        'button[aria-label*="Присоединиться сейчас"]',
        'button:has-text("Присоединиться сейчас")',
        'button[aria-label*="Join now"]',
        'button:has-text("Join now")',
    ],
}


def get_selectors_for(element_type: str) -> list:
    """
    Get list of selectors for a specific element type.

    Args:
        element_type: Key from TEAMS_SELECTORS dict

    Returns:
        List of CSS/text selectors to try (a copy, safe to modify)
    """
    return list(TEAMS_SELECTORS.get(element_type, []))


def get_first_selector(element_type: str) -> str:
    """
    Get the primary (first) selector for an element type.

    Args:
        element_type: Key from TEAMS_SELECTORS dict

    Returns:
        Primary selector string
    """
    selectors = TEAMS_SELECTORS.get(element_type, [])
    return selectors[0] if selectors else ""


def as_selector_group(element_type: str) -> str:
    """Join a selector set into one comma-separated selector for wait_for_selector."""
    return ", ".join(TEAMS_SELECTORS.get(element_type, []))
