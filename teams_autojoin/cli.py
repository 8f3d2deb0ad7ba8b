"""
Command-line entry point for Teams Autojoin.

Usage:
    teams-autojoin                          # open Teams using the saved profile
    teams-autojoin --reset                  # clear saved profile and log in again
    teams-autojoin --list                   # print all team names
    teams-autojoin --team "Sales"           # open a team by (partial) name
    teams-autojoin --team "Sales" --exact   # exact matching
    teams-autojoin --watch-join             # watch for "Join" every 30s for 10 min
    teams-autojoin --watch-join --interval-sec 30 --watch-minutes 10 [--reload-join]
    teams-autojoin --prejoin-timeout-sec 120    # wait for pre-join screen and click "Join now"
    teams-autojoin --prejoin                    # explicitly wait for pre-join and click

Every flag has an environment variable counterpart (see Settings) that is
used only when the flag is absent.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass, field
from typing import Optional, Sequence

from playwright.async_api import Error as PlaywrightError

from teams_autojoin import __version__
from teams_autojoin.config import Settings, get_settings
from teams_autojoin.core import TeamSelectionError, get_logger, setup_logging
from teams_autojoin.meeting_handler import (
    PollConfig,
    ProfileManager,
    TeamsSession,
    ensure_on_teams_hub,
    list_teams,
    maybe_auto_login,
    select_team,
    wait_and_click_join,
    wait_and_click_prejoin,
    wait_for_teams_list,
)


logger = get_logger("cli")

MIN_INTERVAL_SEC = 5
MIN_WATCH_MINUTES = 0.5
DEFAULT_PREJOIN_TIMEOUT_SEC = 120


@dataclass(frozen=True)
class RunOptions:
    """Options for one run, after merging flags with the environment."""

    reset: bool = False
    list_teams: bool = False
    team_query: Optional[str] = None
    exact: bool = False
    watch_join: bool = False
    join_poll: PollConfig = field(default_factory=PollConfig)
    prejoin: bool = False
    prejoin_timeout_sec: int = DEFAULT_PREJOIN_TIMEOUT_SEC
    keep_open: bool = True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="teams-autojoin",
        description="Open Microsoft Teams with a persistent login and auto-join meetings",
    )
    parser.add_argument("--reset", action="store_true", help="Delete the saved browser profile first")
    parser.add_argument("--list", "--list-teams", dest="list_teams", action="store_true",
                        help="Print all team names")
    parser.add_argument("--team", help="Open the first team whose name contains this text")
    parser.add_argument("--exact", action="store_true", help="Require an exact team name match")
    parser.add_argument("--watch-join", action="store_true", help='Watch for the "Join" button and click it')
    parser.add_argument("--interval-sec", type=int, help="Seconds between join checks (default 30)")
    parser.add_argument("--watch-minutes", type=float, help="Minutes to keep watching for join (default 10)")
    parser.add_argument("--reload-join", action="store_true", help="Reload the page before each join check")
    parser.add_argument("--prejoin", "--watch-prejoin", dest="prejoin", action="store_true",
                        help='Wait for the pre-join screen and click "Join now"')
    parser.add_argument("--prejoin-timeout-sec", type=int,
                        help=f"Seconds to wait for the pre-join screen (default {DEFAULT_PREJOIN_TIMEOUT_SEC})")
    parser.add_argument("--headless", action="store_true", help="Run Chromium without a window")
    parser.add_argument("--user-data-dir", help="Browser profile directory")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--no-keep-open", dest="keep_open", action="store_false",
                        help="Close the browser when done instead of waiting for the window to close")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_overrides(args: argparse.Namespace, settings: Settings) -> Settings:
    """Fold browser/logging flags into settings."""
    updates = {}
    if args.headless:
        updates["headless"] = True
    if args.user_data_dir:
        updates["user_data_dir"] = args.user_data_dir
    if args.log_level:
        updates["log_level"] = args.log_level
    return Settings(**{**settings.model_dump(), **updates}) if updates else settings


def resolve_options(args: argparse.Namespace, settings: Settings) -> RunOptions:
    """
    Merge parsed flags with environment settings.

    A flag always wins; the environment is used only when the flag is absent.
    """
    interval_sec = args.interval_sec if args.interval_sec is not None else settings.watch_interval_sec
    minutes = args.watch_minutes if args.watch_minutes is not None else settings.watch_minutes

    if args.prejoin_timeout_sec is not None:
        prejoin_timeout = args.prejoin_timeout_sec
    elif settings.prejoin_timeout_sec is not None:
        prejoin_timeout = settings.prejoin_timeout_sec
    else:
        prejoin_timeout = DEFAULT_PREJOIN_TIMEOUT_SEC

    join_poll = PollConfig(
        interval_seconds=max(MIN_INTERVAL_SEC, interval_sec),
        timeout_seconds=max(MIN_WATCH_MINUTES, minutes) * 60,
        reload_before_each_check=args.reload_join or settings.watch_reload,
    )

    return RunOptions(
        reset=args.reset,
        list_teams=args.list_teams,
        team_query=args.team or settings.team_name,
        exact=args.exact,
        watch_join=args.watch_join or settings.watch_join,
        join_poll=join_poll,
        prejoin=args.prejoin or args.prejoin_timeout_sec is not None or settings.watch_prejoin,
        prejoin_timeout_sec=max(0, prejoin_timeout),
        keep_open=args.keep_open and not settings.headless,
    )


async def _show_teams(session: TeamsSession) -> None:
    try:
        names = await list_teams(session.page)
    except PlaywrightError as e:
        logger.warning(f"Could not read the teams list: {e}")
        names = []

    if not names:
        print("The teams list is empty or was not found.")
        return
    print("\nAvailable teams:")
    for name in names:
        print(f"- {name}")


async def _open_team(session: TeamsSession, query: str, exact: bool) -> None:
    try:
        name = await select_team(session.page, query, exact=exact)
    except PlaywrightError as e:
        print(f"Error while selecting a team: {e}")
        return

    if name:
        print(f"Opened team: {name}")
    else:
        print(f'No team found for "{query}"{" (exact match)" if exact else ""}.')


async def _prejoin(session: TeamsSession, timeout_sec: int) -> bool:
    try:
        clicked = await wait_and_click_prejoin(session.context, timeout_sec)
    except PlaywrightError as e:
        logger.warning(f"Pre-join watcher stopped: {e}")
        clicked = False

    if clicked:
        print('"Join now" clicked. Entering the meeting...')
    else:
        print('Could not click "Join now" in the allotted time.')
    return clicked


async def _watch_join(session: TeamsSession, options: RunOptions) -> bool:
    poll = options.join_poll
    print(
        f'Watching for the "Join" button every {round(poll.interval_seconds)}s '
        f'for up to {round(poll.timeout_seconds / 60)} min'
        f'{" (reloading the page)" if poll.reload_before_each_check else ""}.'
    )
    try:
        joined = await wait_and_click_join(session.page, poll)
    except PlaywrightError as e:
        logger.warning(f"Join watcher stopped: {e}")
        joined = False

    if not joined:
        print('The "Join" button did not appear in the allotted time.')
        return False

    print('"Join" button found and clicked.')
    await _prejoin(session, options.prejoin_timeout_sec)
    return True


async def main(options: RunOptions, settings: Settings) -> None:
    """Run one Teams session according to the resolved options."""
    profile = ProfileManager(settings.user_data_dir)
    if options.reset:
        profile.reset()
    first_run = profile.is_first_run()

    session = TeamsSession(settings, profile=profile)
    try:
        page = await session.start()

        if first_run:
            print("\nFirst run: log in to Microsoft Teams in the opened window.")
            print("The session will be saved and later runs will be logged in automatically.")
            await maybe_auto_login(page, settings.ms_email, settings.ms_password)
        else:
            print("Opening Teams with the saved session...")

        await session.wait_for_app()
        await ensure_on_teams_hub(page)

        if options.list_teams or options.team_query:
            try:
                await wait_for_teams_list(page)
            except TeamSelectionError:
                print('Could not find the teams list. Open the "Teams" section manually and try again.')

        if options.list_teams:
            await _show_teams(session)

        if options.team_query:
            await _open_team(session, options.team_query, options.exact)

        joined = False
        if options.watch_join:
            joined = await _watch_join(session, options)

        if options.prejoin and not joined:
            print(f"Waiting for the pre-join screen (up to {options.prejoin_timeout_sec}s)...")
            await _prejoin(session, options.prejoin_timeout_sec)

        if options.keep_open:
            await session.wait_until_closed()
    finally:
        await session.stop()


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Synchronous entry point; exits with 1 on any uncaught failure."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = apply_overrides(args, get_settings())
        setup_logging(settings.log_level, enable_file_logging=settings.log_to_file)
        options = resolve_options(args, settings)
        asyncio.run(main(options, settings))
    except KeyboardInterrupt:
        print("\nGoodbye!")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
