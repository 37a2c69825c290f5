"""Synchronous client for the Discord endpoints the tracker reads."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import TrackerSettings
from ..quests.models import DiscordUser, Quest, QuestList
from .utils import build_headers, mask_token

logger = logging.getLogger(__name__)

CURRENT_USER_PATH = "/users/@me"
QUESTS_PATH = "/quests"


class DiscordApiError(RuntimeError):
    """Base class for Discord API errors."""


class DiscordTransportError(DiscordApiError):
    """Raised when the request never produced an HTTP response."""


class DiscordHTTPError(DiscordApiError):
    """Raised for any response other than HTTP 200."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API Error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


class DiscordResponseParseError(DiscordApiError):
    """Raised when a 200 response body is not valid JSON."""


class DiscordSchemaError(DiscordApiError):
    """Raised when a JSON payload does not have the expected shape."""


def _summarize(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(item) for item in first.get("loc", ())) or "body"
    return f"{exc.error_count()} validation error(s), first at {location}: {first.get('msg')}"


class DiscordClient:
    """Issue authenticated GET requests against the Discord API."""

    def __init__(
        self,
        settings: TrackerSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        token = settings.discord_token.get_secret_value()
        self._client = httpx.Client(
            base_url=settings.api_base_url,
            headers=build_headers(token, settings.user_agent),
            timeout=settings.request_timeout,
            transport=transport,
        )
        logger.debug("Discord client ready for %s (token %s)", settings.api_base_url, mask_token(token))

    def __enter__(self) -> DiscordClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_json(self, path: str) -> Any:
        """GET ``path`` and return the decoded JSON body."""

        try:
            response = self._client.get(path)
        except httpx.RequestError as exc:
            raise DiscordTransportError(f"Request to {path} failed: {exc}") from exc

        logger.debug("GET %s -> %s", path, response.status_code)
        if response.status_code != 200:
            raise DiscordHTTPError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as exc:
            raise DiscordResponseParseError("Failed to parse response") from exc

    def fetch_current_user(self) -> DiscordUser:
        payload = self.get_json(CURRENT_USER_PATH)
        try:
            return DiscordUser.model_validate(payload)
        except ValidationError as exc:
            raise DiscordSchemaError(f"Unexpected user payload: {_summarize(exc)}") from exc

    def fetch_quests(self) -> list[Quest]:
        payload = self.get_json(QUESTS_PATH)
        try:
            quest_list = QuestList.model_validate(payload)
        except ValidationError as exc:
            raise DiscordSchemaError(f"Could not fetch quests data: {_summarize(exc)}") from exc
        logger.info("Fetched %d quests", len(quest_list.quests))
        return quest_list.quests


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
