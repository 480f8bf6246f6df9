from __future__ import annotations

from pathlib import Path

import pytest

from minigit.core.controller import MiniGitController


@pytest.fixture(autouse=True)
def _isolate_home(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Prevent developer machine `~/.minigit/config.json` from influencing tests."""

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("MINIGIT_DEBUG", "")
    monkeypatch.delenv("MINIGIT_PROJECT_ROOT", raising=False)


@pytest.fixture
def project(tmp_path) -> Path:
    """Create a temporary project directory with two text files."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "a.txt").write_text("hello")
    (root / "b.txt").write_text("world")
    return root


@pytest.fixture
def controller(project) -> MiniGitController:
    """Controller over an initialized repository."""
    ctl = MiniGitController(project_root=project)
    ctl.init()
    return ctl
