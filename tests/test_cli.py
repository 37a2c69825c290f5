from __future__ import annotations

import argparse
from datetime import timedelta
from pathlib import Path

import httpx
import pytest

from quest_tracker import cli
from quest_tracker.render import QuestReport


def write_env(tmp_path: Path, token: str = "tok-abcdef123456") -> Path:
    env_file = tmp_path / ".env"
    env_file.write_text(f"# tracker config\nDISCORD_TOKEN={token}\n", encoding="utf-8")
    return env_file


def discord_transport(quests: list[dict], calls: list[str]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        if request.url.path.endswith("/users/@me"):
            return httpx.Response(200, json={"username": "player", "discriminator": "4242"})
        if request.url.path.endswith("/quests"):
            return httpx.Response(200, json={"quests": quests})
        return httpx.Response(404, text="not found")

    return httpx.MockTransport(handler)


def test_track_quests_renders_report(
    tmp_path: Path, quest_payload, now, report: QuestReport
) -> None:
    env_file = write_env(tmp_path)
    calls: list[str] = []
    transport = discord_transport(
        [
            quest_payload(quest_id="1", name="Halfway", enrolled=True, progress=50, target=100),
            quest_payload(quest_id="2", name="Not started", task_type="PLAY_ON_DESKTOP"),
            quest_payload(
                quest_id="3", name="Too late", enrolled=True, expires_in=-timedelta(hours=3)
            ),
        ],
        calls,
    )

    exit_code = cli.track_quests(
        argparse.Namespace(env_file=str(env_file)),
        report=report,
        transport=transport,
        clock=lambda: now,
    )

    output = report.console.file.getvalue()
    assert exit_code == 0
    assert calls == ["/api/v9/users/@me", "/api/v9/quests"]
    assert "✓ Configuration loaded successfully" in output
    assert "✓ Connected as: player#4242" in output
    assert "Active Quests: 1" in output
    assert "Available: 1" in output
    assert "Expired: 1" in output
    assert "Remaining: 50s" in output
    assert "Task: Play Game" in output
    assert "Too late" not in output
    assert "tok-abcdef123456" not in output


def test_missing_env_file_shows_setup_and_writes_example(
    tmp_path: Path, report: QuestReport
) -> None:

    exit_code = cli.track_quests(argparse.Namespace(env_file=str(tmp_path / ".env")), report=report)

    output = report.console.file.getvalue()
    assert exit_code == 1
    assert "Setup Instructions" in output
    assert "Created .env.example file for reference" in output
    assert (tmp_path / ".env.example").is_file()


def test_placeholder_token_is_rejected_without_network(
    tmp_path: Path, report: QuestReport
) -> None:
    env_file = write_env(tmp_path, token="your_discord_token_here")
    calls: list[str] = []

    exit_code = cli.track_quests(
        argparse.Namespace(env_file=str(env_file)),
        report=report,
        transport=discord_transport([], calls),
    )

    output = report.console.file.getvalue()
    assert exit_code == 1
    assert calls == []
    assert "DISCORD_TOKEN not configured" in output
    assert "placeholder" in output


def test_invalid_optional_setting_is_not_blamed_on_token(
    tmp_path: Path, report: QuestReport
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "DISCORD_TOKEN=real-token-123\nQUEST_TRACKER_LOG_LEVEL=chatty\n", encoding="utf-8"
    )
    calls: list[str] = []

    exit_code = cli.track_quests(
        argparse.Namespace(env_file=str(env_file)),
        report=report,
        transport=discord_transport([], calls),
    )

    output = report.console.file.getvalue()
    assert exit_code == 1
    assert calls == []
    assert "invalid setting in .env file" in output
    assert "QUEST_TRACKER_LOG_LEVEL" in output
    assert "DISCORD_TOKEN not configured" not in output
    assert "add your Discord token" not in output


def test_api_error_prints_troubleshooting_and_fails(
    tmp_path: Path, report: QuestReport
) -> None:
    env_file = write_env(tmp_path)
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(401, text="401: Unauthorized")

    exit_code = cli.track_quests(
        argparse.Namespace(env_file=str(env_file)),
        report=report,
        transport=httpx.MockTransport(handler),
    )

    output = report.console.file.getvalue()
    assert exit_code == 1
    assert calls == ["/api/v9/users/@me"]
    assert "✗ Error: API Error: 401 - 401: Unauthorized" in output
    assert "Troubleshooting:" in output
    assert "QUEST SUMMARY" not in output


def test_main_exits_with_failure_when_config_missing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--env-file", str(tmp_path / ".env")])

    assert excinfo.value.code == 1
    assert "Setup Instructions" in capsys.readouterr().out


def test_parser_defaults_to_dotenv() -> None:
    args = cli.build_parser().parse_args([])

    assert args.env_file == ".env"
