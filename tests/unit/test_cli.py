"""Tests for the command-line interface."""

import json

import pytest
import structlog
from typer.testing import CliRunner

from flowguard.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_llm_env(monkeypatch):
    """Keep the CLI away from any real API key."""
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.setenv("ENABLE_LLM", "false")


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI points structlog at the runner's stderr; undo that afterwards."""
    yield
    structlog.reset_defaults()


def test_sample_prints_json():
    result = runner.invoke(app, ["sample"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["project_name"] == "Apollo Platform v2.0"
    assert len(payload["tasks"]) == 8


def test_analyze_sample_writes_output(tmp_path):
    output = tmp_path / "out" / "result.json"

    result = runner.invoke(app, ["analyze", "--sample", "--no-llm", "--output", str(output)])

    assert result.exit_code == 0
    saved = json.loads(output.read_text())
    assert saved["ai_powered"] is False
    assert saved["saturation"]["is_blocked"] is True
    assert "prioritized_tasks" in saved


def test_analyze_project_file(tmp_path):
    project = tmp_path / "project.json"
    project.write_text(
        json.dumps(
            {
                "project": {
                    "project_name": "From File",
                    "initial_features": ["Auth"],
                    "current_features": ["Auth"],
                    "tasks": [{"title": "Auth flow", "status": "In Progress"}],
                }
            }
        )
    )
    output = tmp_path / "result.json"

    result = runner.invoke(app, ["analyze", str(project), "--output", str(output)])

    assert result.exit_code == 0
    assert "From File" in result.output
    saved = json.loads(output.read_text())
    assert saved["source_count"] == 0
    assert saved["prioritized_tasks"][0]["title"] == "Auth flow"


def test_analyze_with_commit_and_chat_files(tmp_path):
    commits = tmp_path / "commits.csv"
    commits.write_text("sha,author,date,message\nabc,Dev A,2025-01-05,feat: auth\n")
    chat = tmp_path / "chat.txt"
    chat.write_text("12/02/2025, 09:14 - Dev A: waiting on review\n")
    output = tmp_path / "result.json"

    result = runner.invoke(
        app,
        [
            "analyze", "--sample", "--no-llm",
            "--commits", str(commits),
            "--chat", str(chat),
            "--output", str(output),
        ],
    )

    assert result.exit_code == 0
    assert "1 commits, 1 chat messages" in result.output


def test_analyze_requires_input():
    result = runner.invoke(app, ["analyze", "--no-llm"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_parse_commits(tmp_path):
    path = tmp_path / "commits.csv"
    path.write_text(
        "sha,author,date,message\n"
        "a1b2c3d4,Dev A,2025-01-05,feat: initial auth setup\n"
        "b2c3d4e5,Dev B,2025-01-07,feat: dashboard layout\n"
    )

    result = runner.invoke(app, ["parse-commits", str(path)])

    assert result.exit_code == 0
    assert "Parsed 2 commits" in result.output


@pytest.fixture
def commit_csv(tmp_path):
    path = tmp_path / "commits.csv"
    path.write_text("sha,author,date,message\na1b2c3d4,Dev A,2025-01-05,feat: initial auth setup\n")
    return path


def test_parse_commits_respects_log_level(commit_csv, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    result = runner.invoke(app, ["parse-commits", str(commit_csv)])

    assert result.exit_code == 0
    assert "Parsed 1 commits" in result.output
    assert "parsed_commit_csv" not in result.output


def test_parse_commits_logs_at_info(commit_csv, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    result = runner.invoke(app, ["parse-commits", str(commit_csv)])

    assert result.exit_code == 0
    assert "parsed_commit_csv" in result.output


def test_parse_chat(tmp_path):
    path = tmp_path / "chat.txt"
    path.write_text(
        "12/02/2025, 09:14 - Dev A: first\n"
        "continued\n"
        "13/02/2025, 10:00 - Dev B: second\n"
    )

    result = runner.invoke(app, ["parse-chat", str(path)])

    assert result.exit_code == 0
    assert "Parsed 2 messages" in result.output


def test_parse_budget(tmp_path):
    path = tmp_path / "budget.csv"
    path.write_text(
        "Item,Budgeted Hours,Spent Hours,Cost Per Hour,Status\n"
        "Dev A,80,52,60,Blocked\n"
    )

    result = runner.invoke(app, ["parse-budget", str(path)])

    assert result.exit_code == 0
    assert "Parsed 1 budget items" in result.output


def test_parse_commits_missing_file(tmp_path):
    result = runner.invoke(app, ["parse-commits", str(tmp_path / "missing.csv")])

    assert result.exit_code == 1
    assert "Error" in result.output
