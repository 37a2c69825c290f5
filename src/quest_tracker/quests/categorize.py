"""Quest status classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable

from .models import Quest


class QuestStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    AVAILABLE = "available"
    EXPIRED = "expired"


def is_completed(quest: Quest, now: datetime) -> bool:
    return quest.completed_at is not None


def is_available(quest: Quest, now: datetime) -> bool:
    return quest.enrolled_at is None


def is_active(quest: Quest, now: datetime) -> bool:
    return (
        quest.enrolled_at is not None
        and quest.completed_at is None
        and quest.expires_at > now
    )


def is_expired(quest: Quest, now: datetime) -> bool:
    return (
        quest.enrolled_at is not None
        and quest.completed_at is None
        and quest.expires_at <= now
    )


def classify(quest: Quest, now: datetime) -> QuestStatus:
    """Return the single status ``quest`` holds at ``now``.

    Completion is checked first. A completed quest is always enrolled, so it can
    never also be available, and active/expired both require it to be incomplete.
    """

    if is_completed(quest, now):
        return QuestStatus.COMPLETED
    if is_available(quest, now):
        return QuestStatus.AVAILABLE
    if is_active(quest, now):
        return QuestStatus.ACTIVE
    return QuestStatus.EXPIRED


@dataclass(slots=True)
class QuestCategories:
    """Quests grouped by status, each list in the order the API returned them."""

    active: list[Quest] = field(default_factory=list)
    completed: list[Quest] = field(default_factory=list)
    available: list[Quest] = field(default_factory=list)
    expired: list[Quest] = field(default_factory=list)

    def bucket(self, status: QuestStatus) -> list[Quest]:
        return getattr(self, status.value)

    def counts(self) -> dict[QuestStatus, int]:
        return {status: len(self.bucket(status)) for status in QuestStatus}

    @property
    def total(self) -> int:
        return sum(self.counts().values())


def categorize_quests(quests: Iterable[Quest], now: datetime) -> QuestCategories:
    """Partition ``quests`` into the four status buckets using a single ``now``."""

    categories = QuestCategories()
    for quest in quests:
        categories.bucket(classify(quest, now)).append(quest)
    return categories


__all__ = [
    "QuestCategories",
    "QuestStatus",
    "categorize_quests",
    "classify",
    "is_active",
    "is_available",
    "is_completed",
    "is_expired",
]
