from __future__ import annotations
import os
from pathlib import Path
import subprocess
import pytest


@pytest.fixture
def git_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep the user's own Git configuration out of the tests
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    for var in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def repo(git_env: None, tmp_path: Path) -> Path:
    """A Git repository on branch ``main`` with one commit & a clean worktree"""
    path = tmp_path / "project"
    path.mkdir()
    for args in [
        ["init", "-q"],
        ["symbolic-ref", "HEAD", "refs/heads/main"],
    ]:
        subprocess.run(["git", *args], cwd=path, check=True)
    (path / "README.txt").write_text("Hello.\n", encoding="utf-8")
    (path / "src").mkdir()
    (path / "src" / "code.txt").write_text("code\n", encoding="utf-8")
    for args in [
        ["add", "."],
        ["-c", "commit.gpgsign=false", "commit", "-q", "-m", "Initial"],
    ]:
        subprocess.run(["git", *args], cwd=path, check=True)
    return path
