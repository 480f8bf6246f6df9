"""Tests for the Mini Git CLI."""

from __future__ import annotations

import os
import re
import sys

import pytest

from minigit.app.cli import main


@pytest.fixture
def in_project(project, monkeypatch):
    monkeypatch.setenv("MINIGIT_PROJECT_ROOT", str(project))
    return project


def _run(capsys, *args: str) -> tuple[int, str, str]:
    code = main(list(args))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_full_workflow(in_project, capsys):
    assert _run(capsys, "init") == (0, "Initialized Mini Git repository.\n", "")
    assert _run(capsys, "add", "a.txt")[1] == "Added file to tracking: a.txt\n"
    assert _run(capsys, "add", "b.txt")[1] == "Added file to tracking: b.txt\n"

    code, out, _ = _run(capsys, "commit", "first", "commit")
    assert code == 0
    match = re.fullmatch(r"Committed changes\. ID: ([0-9a-f]{7})\n", out)
    assert match
    commit_id = match.group(1)

    (in_project / "a.txt").write_text("changed")

    code, out, _ = _run(capsys, "checkout", commit_id)
    assert code == 0
    assert out == (
        "Restored file: a.txt\n"
        "Restored file: b.txt\n"
        f"Restored files from commit {commit_id}\n"
    )
    assert (in_project / "a.txt").read_text() == "hello"

    code, out, _ = _run(capsys, "log")
    lines = out.splitlines()
    assert lines[0] == "-" * 33
    assert lines[1] == f"ID: {commit_id}"
    assert lines[2] == "Message: first commit"
    assert lines[3].startswith("Time: ")


def test_reported_failures_exit_zero(in_project, capsys):
    _run(capsys, "init")

    assert _run(capsys, "init") == (0, "Repository already exists.\n", "")
    assert _run(capsys, "add", "missing.txt") == (0, "File doesn't exist.\n", "")
    assert _run(capsys, "commit", "msg") == (0, "No files are being tracked.\n", "")
    assert _run(capsys, "checkout", "fffffff") == (0, "Commit not found.\n", "")

    _run(capsys, "add", "a.txt")
    assert _run(capsys, "add", "a.txt") == (0, "File is already being tracked.\n", "")


def test_add_before_init(in_project, capsys):
    assert _run(capsys, "add", "a.txt") == (0, "Not a Mini Git repository. Run init first.\n", "")


def test_checkout_reports_missing_file(in_project, capsys):
    _run(capsys, "init")
    _run(capsys, "add", "a.txt")
    out = _run(capsys, "commit", "only a")[1]
    commit_id = out.strip().rsplit(" ", 1)[-1]
    _run(capsys, "add", "b.txt")

    code, out, _ = _run(capsys, "checkout", commit_id)

    assert code == 0
    assert "File b.txt not found in commit.\n" in out
    assert out.endswith(f"Restored files from commit {commit_id}\n")


def test_commit_warns_about_unreadable_file(in_project, capsys):
    _run(capsys, "init")
    _run(capsys, "add", "a.txt")
    _run(capsys, "add", "b.txt")
    (in_project / "a.txt").unlink()

    code, out, err = _run(capsys, "commit", "msg")

    assert code == 0
    assert out.startswith("Committed changes. ID: ")
    assert "a.txt" in err


def test_empty_log(in_project, capsys):
    _run(capsys, "init")

    assert _run(capsys, "log") == (0, "", "")


def test_no_command_exits_one(in_project, capsys):
    code, out, _ = _run(capsys)

    assert code == 1
    assert "usage:" in out


def test_unknown_command(in_project, capsys):
    assert _run(capsys, "push") == (0, "Unknown command.\n", "")


@pytest.mark.parametrize(
    "command, usage",
    [
        ("add", "Usage: minigit add <filename>\n"),
        ("commit", "Usage: minigit commit <message>\n"),
        ("checkout", "Usage: minigit checkout <commit_id>\n"),
    ],
)
def test_missing_arguments_print_usage(in_project, capsys, command, usage):
    assert _run(capsys, command) == (0, usage, "")


@pytest.mark.parametrize(
    "words",
    [
        ("-", "fix", "--all"),
        ("-fix", "typo"),
        ("--amend", "x"),
        ("--debug",),
        ("-v",),
    ],
)
def test_commit_message_may_start_with_dash(in_project, capsys, words):
    _run(capsys, "init")
    _run(capsys, "add", "a.txt")

    code, out, _ = _run(capsys, "commit", *words)

    assert code == 0
    assert out.startswith("Committed changes. ID: ")
    assert f"Message: {' '.join(words)}" in _run(capsys, "log")[1]


def test_global_flag_before_commit(in_project, capsys, monkeypatch):
    monkeypatch.setenv("MINIGIT_DEBUG", "")
    _run(capsys, "init")
    _run(capsys, "add", "a.txt")

    code, out, _ = _run(capsys, "--debug", "commit", "-x")

    assert code == 0
    assert out.startswith("Committed changes. ID: ")
    assert "Message: -x" in _run(capsys, "log")[1]


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts any bytes in names")
def test_undecodable_filename_is_printed_with_replacement(in_project, capsys):
    name = os.fsdecode(b"caf\xe9.txt")
    (in_project / name).write_bytes(b"menu")
    _run(capsys, "init")

    assert _run(capsys, "add", name) == (0, "Added file to tracking: caf\ufffd.txt\n", "")

    code, out, _ = _run(capsys, "commit", os.fsdecode(b"fix \xff"))
    assert code == 0
    assert out.startswith("Committed changes. ID: ")
    assert "Message: fix \ufffd\n" in _run(capsys, "log")[1]


def test_status(in_project, capsys):
    _run(capsys, "init")
    _run(capsys, "add", "a.txt")

    code, out, _ = _run(capsys, "status")

    assert code == 0
    assert "Tracked files (1):\n  a.txt\n" in out
    assert "Commits: 0\n" in out


def test_lock_timeout_is_a_hard_failure(in_project, capsys):
    _run(capsys, "init")
    (in_project / ".minigit.json").write_text('{"lock": {"timeoutSeconds": 0.05}}')
    (in_project / ".mini_git" / "index.txt.lock").write_text("999")

    code, out, err = _run(capsys, "add", "a.txt")

    assert code == 1
    assert out == ""
    assert err.startswith("Error: ")
