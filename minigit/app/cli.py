"""Mini Git CLI.

Principles:
- Outcomes are reported as text; recognized commands exit 0 even when
  the operation was refused (already tracked, commit not found, ...).
- Only a missing command or a hard failure exits non-zero.
"""

from __future__ import annotations

import argparse
import os
import sys

from .. import __version__
from ..core.controller import MiniGitController
from ..core.models import CheckoutResult, CommitResult, Outcome
from ..errors import MiniGitError
from ..utils.env import determine_project_root, log_debug


COMMANDS = ("init", "add", "commit", "log", "checkout", "status")

TRACK_MESSAGES = {
    Outcome.FILE_NOT_FOUND: "File doesn't exist.",
    Outcome.ALREADY_TRACKED: "File is already being tracked.",
    Outcome.NOT_INITIALIZED: "Not a Mini Git repository. Run init first.",
}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minigit",
        description="Mini Git - track files, commit snapshots, restore them",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init", help="Create a repository in the current directory")

    add = subparsers.add_parser("add", help="Start tracking a file")
    add.add_argument("path", nargs="*", help="File to track")

    commit = subparsers.add_parser("commit", help="Snapshot all tracked files")
    commit.add_argument("message", nargs="*", help="Commit message (every word after 'commit')")

    subparsers.add_parser("log", help="Show commit history (oldest first)")

    checkout = subparsers.add_parser("checkout", help="Restore tracked files from a commit")
    checkout.add_argument("commit_id", nargs="*", help="Commit id")

    subparsers.add_parser("status", help="Show tracked files and the latest commit")

    return parser


def main(args: list[str] | None = None) -> int:
    argv = sys.argv[1:] if args is None else list(args)

    command_at = _first_positional(argv)
    command = argv[command_at] if command_at is not None else None
    if command is not None and command not in COMMANDS:
        print("Unknown command.")
        return 0

    # Message words never go through argparse, so "-fix" stays a word
    message: list[str] = []
    if command == "commit":
        argv, message = argv[:command_at + 1], argv[command_at + 1:]

    parser = create_parser()
    parsed = parser.parse_args(argv)
    if command == "commit":
        parsed.message = message

    if parsed.debug:
        os.environ["MINIGIT_DEBUG"] = "1"

    if not parsed.command:
        parser.print_help()
        return 1

    controller = MiniGitController(project_root=determine_project_root())
    log_debug(f"Command {parsed.command} in {controller.project_root}")

    try:
        if parsed.command == "init":
            return cmd_init(controller)
        if parsed.command == "add":
            return cmd_add(parsed, controller)
        if parsed.command == "commit":
            return cmd_commit(parsed, controller)
        if parsed.command == "log":
            return cmd_log(controller)
        if parsed.command == "checkout":
            return cmd_checkout(parsed, controller)
        if parsed.command == "status":
            return cmd_status(controller)
    except (MiniGitError, OSError) as e:
        print(f"Error: {_printable(str(e))}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def cmd_init(controller: MiniGitController) -> int:
    result = controller.init()
    if result.success:
        print("Initialized Mini Git repository.")
    else:
        print("Repository already exists.")
    return 0


def cmd_add(args: argparse.Namespace, controller: MiniGitController) -> int:
    if not args.path:
        print("Usage: minigit add <filename>")
        return 0

    result = controller.track(args.path[0])
    if result.success:
        print(f"Added file to tracking: {_printable(result.path)}")
    else:
        print(TRACK_MESSAGES.get(result.outcome, result.outcome.value))
    return 0


def cmd_commit(args: argparse.Namespace, controller: MiniGitController) -> int:
    message = " ".join(args.message or [])
    if not message:
        print("Usage: minigit commit <message>")
        return 0

    result = controller.commit(message)
    _print_commit_result(result)
    return 0


def cmd_log(controller: MiniGitController) -> int:
    for line in controller.log_lines():
        print(_printable(line))
    return 0


def cmd_checkout(args: argparse.Namespace, controller: MiniGitController) -> int:
    if not args.commit_id:
        print("Usage: minigit checkout <commit_id>")
        return 0

    result = controller.checkout(args.commit_id[0])
    _print_checkout_result(result)
    return 0


def cmd_status(controller: MiniGitController) -> int:
    status = controller.status()
    if not status.initialized:
        print("Not a Mini Git repository. Run init first.")
        return 0

    print(f"Repository: {status.repo_dir}")
    print(f"Tracked files ({len(status.tracked_files)}):")
    for path in status.tracked_files:
        print(f"  {_printable(path)}")
    print(f"Commits: {status.commit_count}")
    latest = status.latest_commit
    if latest is not None:
        print(f"Latest: {latest.id}  {_printable(latest.message)}  ({latest.timestamp})")
    return 0


def _print_commit_result(result: CommitResult) -> None:
    if result.outcome is Outcome.NO_TRACKED_FILES:
        print("No files are being tracked.")
        return

    for skipped in result.skipped:
        print(f"Warning: could not read {_printable(skipped.path)}, not included in commit", file=sys.stderr)
    print(f"Committed changes. ID: {result.commit_id}")


def _print_checkout_result(result: CheckoutResult) -> None:
    if result.outcome is Outcome.COMMIT_NOT_FOUND:
        print("Commit not found.")
        return

    for item in result.files:
        if item.outcome is Outcome.RESTORED:
            print(f"Restored file: {_printable(item.path)}")
        elif item.outcome is Outcome.FILE_MISSING_FROM_SNAPSHOT:
            print(f"File {_printable(item.path)} not found in commit.")
        else:
            print(f"Could not restore file: {_printable(item.path)} ({item.reason})")
    print(f"Restored files from commit {result.commit_id}")


def _first_positional(argv: list[str]) -> int | None:
    for i, arg in enumerate(argv):
        if not arg.startswith("-"):
            return i
    return None


def _printable(text: str) -> str:
    """Replace undecodable filename bytes so the text can be printed."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


if __name__ == "__main__":
    sys.exit(main())
