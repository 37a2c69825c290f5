"""Typed models for the Discord user and quest payloads."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _tag_variant(raw: Any, variant: str) -> Any:
    if isinstance(raw, dict):
        return {**raw, "variant": variant}
    return raw


class DiscordUser(BaseModel):
    """The account the credential belongs to."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    username: str
    discriminator: str
    global_name: str | None = None

    @property
    def display_name(self) -> str:
        # Accounts migrated to unique usernames report the discriminator "0".
        if self.discriminator in {"0", "0000"}:
            return self.username
        return f"{self.username}#{self.discriminator}"


class QuestApplication(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str


class QuestMessages(BaseModel):
    model_config = ConfigDict(extra="ignore")

    quest_name: str


class QuestTask(BaseModel):
    """A single task definition; ``target`` is measured in seconds."""

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    target: float


class _TaskTable(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tasks: dict[str, QuestTask]

    @field_validator("tasks")
    @classmethod
    def _require_tasks(cls, value: dict[str, QuestTask]) -> dict[str, QuestTask]:
        if not value:
            raise ValueError("Task configuration must declare at least one task")
        return value


class PrimaryTaskConfig(_TaskTable):
    variant: Literal["task_config"] = "task_config"


class TaskConfigV2(_TaskTable):
    variant: Literal["task_config_v2"] = "task_config_v2"


TaskConfig = Annotated[Union[PrimaryTaskConfig, TaskConfigV2], Field(discriminator="variant")]


class QuestConfig(BaseModel):
    """Server-side definition of a quest."""

    model_config = ConfigDict(extra="ignore")

    expires_at: datetime
    application: QuestApplication
    messages: QuestMessages
    task_config: TaskConfig

    @model_validator(mode="before")
    @classmethod
    def _select_task_config(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if isinstance(data.get("task_config"), dict) and "variant" in data["task_config"]:
            return data

        payload = dict(data)
        primary = payload.pop("task_config", None)
        fallback = payload.pop("task_config_v2", None)
        if primary is not None:
            payload["task_config"] = _tag_variant(primary, "task_config")
        elif fallback is not None:
            payload["task_config"] = _tag_variant(fallback, "task_config_v2")
        return payload

    @field_validator("expires_at")
    @classmethod
    def _normalize_expiry(cls, value: datetime) -> datetime:
        return _as_utc(value)


class TaskProgress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: float = 0

    @field_validator("value", mode="before")
    @classmethod
    def _default_missing_value(cls, value: Any):
        return 0 if value is None else value


class QuestUserStatus(BaseModel):
    """Per-user enrollment and progress state."""

    model_config = ConfigDict(extra="ignore")

    enrolled_at: datetime | None = None
    completed_at: datetime | None = None
    claimed_at: datetime | None = None
    progress: dict[str, TaskProgress] = Field(default_factory=dict)

    @field_validator("enrolled_at", "completed_at", "claimed_at")
    @classmethod
    def _normalize_timestamps(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    @field_validator("progress", mode="before")
    @classmethod
    def _ensure_mapping(cls, value: Any):
        if value is None:
            return {}
        return value


class Quest(BaseModel):
    """A quest record as returned by the quests endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    config: QuestConfig
    user_status: QuestUserStatus | None = None

    @property
    def name(self) -> str:
        return self.config.messages.quest_name

    @property
    def application_name(self) -> str:
        return self.config.application.name

    @property
    def expires_at(self) -> datetime:
        return self.config.expires_at

    @property
    def enrolled_at(self) -> datetime | None:
        return self.user_status.enrolled_at if self.user_status else None

    @property
    def completed_at(self) -> datetime | None:
        return self.user_status.completed_at if self.user_status else None

    def primary_task(self) -> tuple[str, QuestTask]:
        """Return the first declared task type and its definition."""

        task_type, task = next(iter(self.config.task_config.tasks.items()))
        return task_type, task

    def progress_for(self, task_type: str) -> float:
        """Return the recorded progress for ``task_type``, or 0 when none is recorded."""

        if self.user_status is None:
            return 0
        entry = self.user_status.progress.get(task_type)
        return entry.value if entry is not None else 0


class QuestList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    quests: list[Quest]


__all__ = [
    "DiscordUser",
    "PrimaryTaskConfig",
    "Quest",
    "QuestApplication",
    "QuestConfig",
    "QuestList",
    "QuestMessages",
    "QuestTask",
    "QuestUserStatus",
    "TaskConfig",
    "TaskConfigV2",
    "TaskProgress",
]
