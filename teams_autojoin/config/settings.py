"""
Configuration settings for Teams Autojoin.
Uses Pydantic Settings for type-safe configuration with environment variable support.

Every value here mirrors a command-line flag; the flag always wins and the
environment (or .env file) is only consulted when the flag is absent.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Target application
    teams_url: str = Field(
        default="https://teams.microsoft.com/",
        description="Teams web application URL"
    )

    # Optional auto-login (may not work with 2FA)
    ms_email: Optional[str] = Field(default=None, description="Microsoft account e-mail")
    ms_password: Optional[str] = Field(default=None, description="Microsoft account password")

    # Team selection
    team_name: Optional[str] = Field(default=None, description="Team to open (substring match)")

    # Join button watcher
    watch_join: bool = Field(default=False, description="Watch for the meeting 'Join' button")
    watch_interval_sec: int = Field(default=30, description="Seconds between join checks")
    watch_minutes: float = Field(default=10.0, description="Total minutes to watch for join")
    watch_reload: bool = Field(default=False, description="Reload the page before each join check")

    # Pre-join screen watcher
    prejoin_timeout_sec: Optional[int] = Field(
        default=None,
        description="Seconds to wait for the pre-join 'Join now' button (120 when unset)"
    )
    watch_prejoin: bool = Field(default=False, description="Watch for the pre-join screen explicitly")

    # Browser
    user_data_dir: str = Field(
        default=".pw-user-data/teams",
        description="Persistent Chromium profile directory"
    )
    headless: bool = Field(default=False, description="Run Chromium headless")

    # Application settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(default=False, description="Also write logs under logs/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


def get_settings() -> Settings:
    """Build a fresh Settings instance from the current environment."""
    return Settings()
