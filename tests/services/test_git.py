from __future__ import annotations

import subprocess
from typing import Any

import pytest

from rexp.services import git


def _fake_run(stdout: str, returncode: int = 0, calls: list[list[str]] | None = None) -> Any:
    def run(args: list[str], **_kwargs: Any) -> subprocess.CompletedProcess[str]:
        if calls is not None:
            calls.append(args)
        return subprocess.CompletedProcess(args, returncode, stdout=stdout)

    return run


def test_git_log_runs_in_entry_directory(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(git.subprocess, "run", _fake_run("Fix parser\n", calls=calls))

    assert git.last_commit_message("/repo/src/main.py") == "Fix parser"
    assert calls == [["git", "-C", "/repo/src", "log", "-1", "--format=%s", "--", "main.py"]]


def test_commit_time_asks_for_relative_dates(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(git.subprocess, "run", _fake_run("3 days ago\n", calls=calls))

    assert git.last_commit_time("/repo/a.txt") == "3 days ago"
    assert "--date=relative" in calls[0]


def test_outside_repository_is_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(git.subprocess, "run", _fake_run("", returncode=128))

    assert git.last_committer("/tmp/a.txt") == ""


def test_missing_git_binary_is_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    def run(*_args: Any, **_kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise FileNotFoundError(2, "No such file or directory", "git")

    monkeypatch.setattr(git.subprocess, "run", run)

    assert git.last_commit_message("/repo/a.txt") == ""
