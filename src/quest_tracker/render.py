"""Terminal rendering for the quest report."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.text import Text

from .quests import DiscordUser, Quest, QuestCategories

PROGRESS_BAR_WIDTH = 20
RULE_WIDTH = 60


@dataclass(frozen=True, slots=True)
class TaskTypeInfo:
    icon: str
    label: str


TASK_TYPES: dict[str, TaskTypeInfo] = {
    "WATCH_VIDEO": TaskTypeInfo("📺", "Watch Video"),
    "WATCH_VIDEO_ON_MOBILE": TaskTypeInfo("📱", "Watch on Mobile"),
    "PLAY_ON_DESKTOP": TaskTypeInfo("🎮", "Play Game"),
    "STREAM_ON_DESKTOP": TaskTypeInfo("📡", "Stream Game"),
    "PLAY_ACTIVITY": TaskTypeInfo("🎯", "Play Activity"),
}
FALLBACK_TASK_ICON = "📋"

TIPS = (
    "Video quests can be completed in browser",
    "Game/Stream quests require Discord Desktop App",
    "Stream quests need at least 1 person in voice chat",
    "Check back regularly before quests expire!",
)


def describe_task_type(task_type: str) -> TaskTypeInfo:
    """Return the icon and label for ``task_type``; unknown tags keep their raw name."""

    return TASK_TYPES.get(task_type, TaskTypeInfo(FALLBACK_TASK_ICON, task_type))


def format_time(seconds: float) -> str:
    """Render a duration as ``"1h 1m"``, ``"1m 30s"`` or ``"5s"``."""

    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def time_remaining(expires_at: datetime, now: datetime) -> str:
    """Render the countdown to ``expires_at`` as ``"1d 2h"``, ``"2h"`` or ``"Expired"``."""

    diff = (expires_at - now).total_seconds()
    if diff <= 0:
        return "Expired"
    days, remainder = divmod(int(diff), 86400)
    hours = remainder // 3600
    if days > 0:
        return f"{days}d {hours}h"
    return f"{hours}h"


def format_date(value: datetime) -> str:
    """Render ``value`` in local time, e.g. ``"Oct 5, 02:30 PM"``."""

    local = value.astimezone()
    return f"{local:%b} {local.day}, {local:%I:%M %p}"


def progress_percentage(current: float, target: float) -> float:
    if target <= 0:
        return 100.0
    return max(0.0, min(current / target * 100, 100.0))


def progress_bar(current: float, target: float, length: int = PROGRESS_BAR_WIDTH) -> Text:
    """Build a fixed-width bar; both the fill and the percentage cap at 100%."""

    percentage = progress_percentage(current, target)
    filled = math.floor(percentage / 100 * length)
    return Text.assemble(
        "[",
        ("█" * filled, "green"),
        "░" * (length - filled),
        f"] {percentage:.1f}%",
    )


class QuestReport:
    """Writes the quest report and the surrounding status messages to a console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False, emoji=False)

    def _line(self, *parts: str | tuple[str, str] | Text) -> None:
        self.console.print(Text.assemble(*parts))

    def _section(self, title: str, icon: str) -> None:
        self.console.print()
        self._line((f"{icon} {title}", "bold yellow"))
        self._line(("━" * RULE_WIDTH, "white"))

    # Status messages

    def loading_config(self) -> None:
        self._line(("🔐 Loading configuration from .env file...", "cyan"))

    def config_loaded(self) -> None:
        self._line(("✓ Configuration loaded successfully", "green"))

    def setup_instructions(self, env_path: Path, example_path: Path | None) -> None:
        self.console.print()
        self._line((f"✗ Error: {env_path} file not found!", "red"))
        self.console.print()
        self._line(("📝 Setup Instructions:", "yellow"))
        self.console.print()
        self._line(("Step 1: Create .env file", "bold"))
        self._line("  Create a file named ", (".env", "cyan"), " in the directory you run the tracker from")
        self.console.print()
        self._line(("Step 2: Add your Discord token", "bold"))
        self._line("  Add this line to your .env file:")
        self._line("  ", ("DISCORD_TOKEN=your_token_here", "green"))
        self.console.print()
        self._line(("Step 3: Get your Discord token", "bold"))
        self._line("  1. Open Discord in browser (discord.com)")
        self._line("  2. Press ", ("F12", "cyan"), " to open Developer Console")
        self._line("  3. Go to ", ('"Network"', "cyan"), " tab")
        self._line("  4. Refresh page (", ("F5", "cyan"), ")")
        self._line("  5. Click any request to ", ('"discord.com/api"', "cyan"))
        self._line("  6. Find ", ('"Authorization"', "cyan"), " in Request Headers")
        self._line("  7. Copy the token value")
        self.console.print()
        self._line(("Step 4: Update .gitignore", "bold"))
        self._line("  Add this line to your .gitignore:")
        self._line("  ", (".env", "green"))
        self.console.print()
        if example_path is not None:
            self._line((f"✓ Created {example_path.name} file for reference", "green"))
            self._line("  Copy it to .env and add your token")
            self.console.print()
        self._line(("⚠️  WARNING: Never share your token! It gives full account access!", "red"))
        self.console.print()

    def invalid_token(self, reason: str) -> None:
        self.console.print()
        self._line(("✗ Error: DISCORD_TOKEN not configured in .env file!", "red"))
        self._line("  ", (reason, "red"))
        self.console.print()
        self._line(("Please edit your .env file and add your Discord token:", "yellow"))
        self._line("  ", ("DISCORD_TOKEN=your_actual_token_here", "green"))
        self.console.print()
        self._line("See .env.example for reference.")
        self.console.print()

    def invalid_setting(self, reason: str) -> None:
        self.console.print()
        self._line(("✗ Error: invalid setting in .env file!", "red"))
        self._line("  ", (reason, "red"))
        self.console.print()
        self._line(("Please fix or remove the setting; optional settings fall back to their defaults.", "yellow"))
        self.console.print()
        self._line("See .env.example for reference.")
        self.console.print()

    def troubleshooting(self, error: Exception) -> None:
        self.console.print()
        self._line((f"✗ Error: {error}", "red"))
        self.console.print()
        self._line(("Troubleshooting:", "yellow"))
        self._line("  • Check if your token in .env is correct")
        self._line("  • Make sure .env file is in the same directory")
        self._line("  • Verify your internet connection")
        self._line("  • Token might have expired - get a new one")
        self.console.print()

    # Report

    def header(self) -> None:
        self.console.print()
        self._line(("╔══════════════════════════════════════════════════════╗", "bold cyan"))
        self._line(("║       🎮 DISCORD QUEST TRACKER (CLI) 🎮              ║", "bold cyan"))
        self._line(("╚══════════════════════════════════════════════════════╝", "bold cyan"))
        self.console.print()

    def fetching(self) -> None:
        self._line(("📡 Fetching quest data...", "cyan"))

    def connected(self, user: DiscordUser) -> None:
        self._line((f"✓ Connected as: {user.display_name}", "green"))

    def summary(self, categories: QuestCategories) -> None:
        self._section("QUEST SUMMARY", "📊")
        self._line("   ", ("✓", "green"), " Active Quests: ", (str(len(categories.active)), "bold"))
        self._line("   ", ("✓", "green"), " Completed: ", (str(len(categories.completed)), "bold"))
        self._line("   ", ("○", "yellow"), " Available: ", (str(len(categories.available)), "bold"))
        self._line("   ", ("✗", "red"), " Expired: ", (str(len(categories.expired)), "bold"))

    def _quest_heading(self, index: int, quest: Quest, task_type: str) -> None:
        info = describe_task_type(task_type)
        self.console.print()
        self._line((f"[{index}] {info.icon} {quest.name}", "bold"))
        self._line("    App: ", (quest.application_name, "cyan"))
        self._line(f"    Task: {info.label}")

    def _expiry_line(self, quest: Quest, now: datetime) -> None:
        self._line(
            "    Expires: ",
            (format_date(quest.expires_at), "yellow"),
            f" (in {time_remaining(quest.expires_at, now)})",
        )

    def active_quests(self, quests: list[Quest], now: datetime) -> None:
        if not quests:
            self.console.print()
            self._line(("   No active quests in progress", "yellow"))
            return

        self._section("ACTIVE QUESTS (In Progress)", "🎯")
        for index, quest in enumerate(quests, start=1):
            task_type, task = quest.primary_task()
            progress = quest.progress_for(task_type)
            self._quest_heading(index, quest, task_type)
            self._line(
                "    Progress: ",
                progress_bar(progress, task.target),
                f" ({format_time(progress)} / {format_time(task.target)})",
            )
            self._expiry_line(quest, now)
            if progress < task.target:
                self._line("    Remaining: ", (format_time(task.target - progress), "magenta"))
            else:
                self._line("    Status: ", ("✓ Ready to claim!", "green"))

    def available_quests(self, quests: list[Quest], now: datetime) -> None:
        if not quests:
            return

        self._section("AVAILABLE QUESTS (Not Started)", "🆕")
        for index, quest in enumerate(quests, start=1):
            task_type, task = quest.primary_task()
            self._quest_heading(index, quest, task_type)
            self._line("    Time needed: ", (format_time(task.target), "magenta"))
            self._expiry_line(quest, now)

    def completed_quests(self, quests: list[Quest]) -> None:
        if not quests:
            return

        self._section("COMPLETED QUESTS", "✅")
        for index, quest in enumerate(quests, start=1):
            self.console.print()
            self._line((f"[{index}] ✓ {quest.name}", "green"))
            # completed_at is always set for quests in this bucket
            self._line(f"    Completed: {format_date(quest.completed_at)}")

    def tips(self) -> None:
        self._section("TIPS", "💡")
        for tip in TIPS:
            self._line((f"   • {tip}", "white"))

    def footer(self) -> None:
        self.console.print()
        self._line(("━" * RULE_WIDTH, "cyan"))
        self._line(("✨ Quest tracking complete!", "green"))
        self._line(("🔄 Run this command again anytime to refresh", "white"))
        self.console.print()

    def render(self, categories: QuestCategories, now: datetime) -> None:
        """Print the summary and the active, available and completed listings."""

        self.summary(categories)
        self.active_quests(categories.active, now)
        self.available_quests(categories.available, now)
        self.completed_quests(categories.completed)
        self.tips()
        self.footer()


__all__ = [
    "FALLBACK_TASK_ICON",
    "QuestReport",
    "TASK_TYPES",
    "TaskTypeInfo",
    "describe_task_type",
    "format_date",
    "format_time",
    "progress_bar",
    "progress_percentage",
    "time_remaining",
]
