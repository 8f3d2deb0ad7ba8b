"""
Tests for settings and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError

from teams_autojoin.config import Settings
from teams_autojoin.core import get_logger, setup_logging
from teams_autojoin.core.logging import ColoredFormatter


ENV_VARS = [
    "TEAMS_URL", "MS_EMAIL", "MS_PASSWORD", "TEAM_NAME", "WATCH_JOIN",
    "WATCH_INTERVAL_SEC", "WATCH_MINUTES", "WATCH_RELOAD", "PREJOIN_TIMEOUT_SEC",
    "WATCH_PREJOIN", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Settings"""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.teams_url == "https://teams.microsoft.com/"
        assert settings.watch_interval_sec == 30
        assert settings.watch_minutes == 10
        assert settings.prejoin_timeout_sec is None
        assert settings.watch_join is False

    def test_reads_environment(self, clean_env):
        clean_env.setenv("TEAMS_URL", "https://teams.example/")
        clean_env.setenv("MS_EMAIL", "me@example.com")
        clean_env.setenv("MS_PASSWORD", "secret")
        clean_env.setenv("TEAM_NAME", "Команда A")
        clean_env.setenv("WATCH_JOIN", "1")
        clean_env.setenv("WATCH_INTERVAL_SEC", "20")
        clean_env.setenv("WATCH_MINUTES", "2.5")
        clean_env.setenv("WATCH_RELOAD", "1")
        clean_env.setenv("PREJOIN_TIMEOUT_SEC", "60")
        clean_env.setenv("WATCH_PREJOIN", "1")

        settings = Settings(_env_file=None)

        assert settings.teams_url == "https://teams.example/"
        assert settings.team_name == "Команда A"
        assert settings.watch_join is True
        assert settings.watch_interval_sec == 20
        assert settings.watch_minutes == 2.5
        assert settings.watch_reload is True
        assert settings.prejoin_timeout_sec == 60
        assert settings.watch_prejoin is True

    def test_reads_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TEAM_NAME=Sales\nWATCH_JOIN=true\n", encoding="utf-8")

        settings = Settings(_env_file=str(env_file))

        assert settings.team_name == "Sales"
        assert settings.watch_join is True

    def test_log_level_validated(self, clean_env):
        assert Settings(_env_file=None, log_level="warning").log_level == "WARNING"
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")


class TestLogging:
    """setup_logging() / get_logger()"""

    def test_child_logger_name(self):
        assert get_logger("poller").name == "teams_autojoin.poller"

    def test_setup_replaces_handlers(self):
        setup_logging("DEBUG")
        logger = setup_logging("WARNING")

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_file_logging(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        logger = setup_logging("INFO", enable_file_logging=True)
        get_logger("test").info("hello file")
        for handler in logger.handlers:
            handler.flush()

        logs = list((tmp_path / "logs").glob("teams_autojoin_*.log"))
        assert len(logs) == 1
        assert "hello file" in logs[0].read_text(encoding="utf-8")

        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def test_colored_formatter_leaves_record_untouched(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "\033[32mINFO\033[0m msg" == formatted
        assert record.levelname == "INFO"
