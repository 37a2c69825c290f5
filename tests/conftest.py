from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from rich.console import Console

from quest_tracker.render import QuestReport

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DISCORD_TOKEN",
        "DISCORD_API_BASE_URL",
        "QUEST_TRACKER_USER_AGENT",
        "QUEST_TRACKER_TIMEOUT",
        "QUEST_TRACKER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def report() -> QuestReport:
    """Report writing to an in-memory console with colour and wrapping disabled."""

    console = Console(
        file=io.StringIO(), width=120, color_system=None, highlight=False, emoji=False, soft_wrap=True
    )
    return QuestReport(console)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def quest_payload():
    """Factory for raw quest dictionaries shaped like the quests endpoint."""

    def _build(
        *,
        quest_id: str = "1",
        name: str = "Sample Quest",
        app_name: str = "Sample Game",
        task_type: str = "WATCH_VIDEO",
        target: float = 100,
        expires_in: timedelta = timedelta(hours=2),
        enrolled: bool = False,
        completed: bool = False,
        progress: float | None = None,
        config_key: str = "task_config",
    ) -> dict[str, Any]:
        user_status: dict[str, Any] | None = None
        if enrolled or completed:
            user_status = {
                "enrolled_at": (NOW - timedelta(days=1)).isoformat(),
                "completed_at": (NOW - timedelta(hours=1)).isoformat() if completed else None,
                "progress": {},
            }
            if progress is not None:
                user_status["progress"][task_type] = {"value": progress}
        return {
            "id": quest_id,
            "config": {
                "expires_at": (NOW + expires_in).isoformat(),
                "application": {"id": "app-" + quest_id, "name": app_name},
                "messages": {"quest_name": name},
                config_key: {"tasks": {task_type: {"type": task_type, "target": target}}},
            },
            "user_status": user_status,
        }

    return _build
