"""Configuration management for the quest tracker."""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = Path(".env")
EXAMPLE_ENV_FILENAME = ".env.example"
PLACEHOLDER_TOKEN = "your_discord_token_here"

EXAMPLE_ENV_CONTENT = f"""# Discord Quest Tracker Configuration
#
# IMPORTANT: Never commit this file to Git!
# Add .env to your .gitignore file
#
# How to get your Discord token:
# 1. Open Discord in browser (discord.com)
# 2. Press F12 to open Developer Console
# 3. Go to "Network" tab
# 4. Refresh page (F5)
# 5. Click any request to "discord.com/api"
# 6. Find "Authorization" in Request Headers
# 7. Copy the token value and paste below

DISCORD_TOKEN={PLACEHOLDER_TOKEN}

# Optional settings:
# DISCORD_API_BASE_URL=https://discord.com/api/v9
# QUEST_TRACKER_TIMEOUT=5
# QUEST_TRACKER_LOG_LEVEL=WARNING

# Example (don't use this, it's fake):
# DISCORD_TOKEN=MTIzNDU2Nzg5MDEyMzQ1Njc4.AbCdEf.GhIjKlMnOpQrStUvWxYz
"""


class ConfigError(RuntimeError):
    """Base class for configuration errors."""


class ConfigMissingError(ConfigError):
    """Raised when the configuration file is absent or unreadable."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found: {path}")
        self.path = path


class ConfigInvalidError(ConfigError):
    """Raised when the configuration file exists but its values are unusable."""


class ConfigTokenError(ConfigInvalidError):
    """Raised when DISCORD_TOKEN is absent, blank or still the placeholder."""


class TrackerSettings(BaseSettings):
    """Runtime configuration parsed from the .env file, with the environment as fallback."""

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    discord_token: SecretStr = Field(validation_alias="DISCORD_TOKEN")
    api_base_url: str = Field(
        default="https://discord.com/api/v9", validation_alias="DISCORD_API_BASE_URL"
    )
    user_agent: str = Field(
        default="DiscordBot (QuestTracker, 1.0.0)", validation_alias="QUEST_TRACKER_USER_AGENT"
    )
    request_timeout: float = Field(default=5.0, validation_alias="QUEST_TRACKER_TIMEOUT")
    log_level: str = Field(default="WARNING", validation_alias="QUEST_TRACKER_LOG_LEVEL")

    @field_validator("discord_token")
    @classmethod
    def _reject_placeholder_token(cls, value: SecretStr) -> SecretStr:
        token = value.get_secret_value().strip()
        if not token:
            raise ValueError("DISCORD_TOKEN must not be empty")
        if token == PLACEHOLDER_TOKEN:
            raise ValueError("DISCORD_TOKEN still holds the example placeholder value")
        return SecretStr(token)

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        normalized = value.strip().rstrip("/")
        if not normalized.startswith(("http://", "https://")):
            raise ValueError("DISCORD_API_BASE_URL must be an http(s) URL")
        return normalized

    @field_validator("request_timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("QUEST_TRACKER_TIMEOUT must be > 0")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "QUEST_TRACKER_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized


def read_env_file(path: Path | str = DEFAULT_ENV_FILE) -> dict[str, str] | None:
    """Parse a dotenv-style file into a mapping.

    Returns ``None`` when the file is missing or cannot be read, so callers can
    fall back to the setup instructions instead of handling an exception.
    """

    env_path = Path(path)
    if not env_path.is_file():
        return None

    try:
        raw_values = dotenv_values(env_path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read %s: %s", env_path, exc)
        return None

    # Keys declared without "=" come back as None.
    return {key: value for key, value in raw_values.items() if value is not None}


def _describe_validation_error(exc: ValidationError) -> str:
    # Built from loc/msg only so input values (the token) never reach the message.
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "settings"
        message = error.get("msg", "invalid value").removeprefix("Value error, ")
        if error.get("type") == "missing":
            message = "is not set"
        parts.append(f"{location}: {message}")
    return "; ".join(parts)


def load_settings(path: Path | str = DEFAULT_ENV_FILE) -> TrackerSettings:
    """Load and validate settings from ``path``."""

    env_path = Path(path)
    values = read_env_file(env_path)
    if values is None:
        raise ConfigMissingError(env_path)

    try:
        settings = TrackerSettings(**values)
    except ValidationError as exc:
        token_errors = [error for error in exc.errors() if error.get("loc") == ("DISCORD_TOKEN",)]
        error_type = ConfigTokenError if token_errors else ConfigInvalidError
        raise error_type(_describe_validation_error(exc)) from None

    logger.info("Loaded configuration from %s", env_path)
    return settings


def write_example_env(directory: Path | str = Path(".")) -> Path | None:
    """Write the example configuration file, returning its path on success."""

    target = Path(directory) / EXAMPLE_ENV_FILENAME
    try:
        target.write_text(EXAMPLE_ENV_CONTENT, encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write %s: %s", target, exc)
        return None
    return target


__all__ = [
    "DEFAULT_ENV_FILE",
    "ConfigError",
    "ConfigInvalidError",
    "ConfigMissingError",
    "ConfigTokenError",
    "EXAMPLE_ENV_CONTENT",
    "PLACEHOLDER_TOKEN",
    "TrackerSettings",
    "load_settings",
    "read_env_file",
    "write_example_env",
]
