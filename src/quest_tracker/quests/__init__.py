"""Quest models and categorization exports."""

from .categorize import (
    QuestCategories,
    QuestStatus,
    categorize_quests,
    classify,
    is_active,
    is_available,
    is_completed,
    is_expired,
)
from .models import DiscordUser, Quest, QuestList, QuestTask

__all__ = [
    "DiscordUser",
    "Quest",
    "QuestCategories",
    "QuestList",
    "QuestStatus",
    "QuestTask",
    "categorize_quests",
    "classify",
    "is_active",
    "is_available",
    "is_completed",
    "is_expired",
]
