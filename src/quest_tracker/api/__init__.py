"""Discord HTTP API access."""

from .client import (
    CURRENT_USER_PATH,
    QUESTS_PATH,
    DiscordApiError,
    DiscordClient,
    DiscordHTTPError,
    DiscordResponseParseError,
    DiscordSchemaError,
    DiscordTransportError,
)

__all__ = [
    "CURRENT_USER_PATH",
    "QUESTS_PATH",
    "DiscordApiError",
    "DiscordClient",
    "DiscordHTTPError",
    "DiscordResponseParseError",
    "DiscordSchemaError",
    "DiscordTransportError",
]
