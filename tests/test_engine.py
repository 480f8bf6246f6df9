"""Tests for the commit engine."""

from datetime import datetime

import pytest

from minigit.core.engine import CommitEngine, current_timestamp, normalize_message
from minigit.core.identifiers import generate
from minigit.core.index import IndexFile
from minigit.core.models import Outcome
from minigit.core.repository import RepositoryStore

FIXED_NOW = datetime(2026, 10, 19, 17, 25, 0)


@pytest.fixture
def store(project):
    store = RepositoryStore(project_root=project)
    store.initialize()
    return store


@pytest.fixture
def index(store):
    return IndexFile(store.index_path)


@pytest.fixture
def engine(store, index):
    return CommitEngine(store=store, index=index, clock=lambda: FIXED_NOW)


@pytest.fixture
def tracked(index):
    index.append_tracked_file("a.txt")
    index.append_tracked_file("b.txt")
    return index


class TestCommit:
    def test_commit_and_restore_round_trip(self, engine, tracked, project):
        """Checkout brings back the exact committed bytes."""
        result = engine.commit("msg")
        assert result.success

        (project / "a.txt").write_text("changed a")
        (project / "b.txt").write_text("changed b")

        restore = engine.checkout(result.commit_id)

        assert restore.success
        assert restore.restored == ["a.txt", "b.txt"]
        assert (project / "a.txt").read_text() == "hello"
        assert (project / "b.txt").read_text() == "world"

    def test_id_covers_contents_in_order_then_message(self, engine, tracked):
        result = engine.commit("msg")

        assert result.commit_id == generate(b"hello" + b"world" + b"msg")

    def test_snapshot_mirrors_tracked_paths(self, engine, index, store, project):
        (project / "src").mkdir()
        (project / "src" / "main.py").write_bytes(b"print(1)\n")
        index.append_tracked_file("src/main.py")

        result = engine.commit("nested")

        snapshot = store.snapshot_dir(result.commit_id)
        assert (snapshot / "src" / "main.py").read_bytes() == b"print(1)\n"
        assert [f.outcome for f in result.files] == [Outcome.CAPTURED]

    def test_record_appended_with_timestamp(self, engine, tracked, index):
        result = engine.commit("first")

        records = list(index.iter_commit_records())
        assert records == [result.record]
        assert records[0].message == "first"
        assert records[0].timestamp == FIXED_NOW.ctime()
        assert "\n" not in records[0].timestamp

    def test_no_tracked_files(self, engine, store, index):
        """Nothing is written when the tracked set is empty."""
        before = index.path.read_text()

        result = engine.commit("msg")

        assert not result.success
        assert result.outcome is Outcome.NO_TRACKED_FILES
        assert list(store.commits_dir.iterdir()) == []
        assert index.path.read_text() == before

    def test_unreadable_file_is_skipped(self, engine, tracked, store, project):
        """A missing tracked file contributes nothing; the rest is committed."""
        (project / "a.txt").unlink()

        result = engine.commit("msg")

        assert result.success
        assert result.degraded
        assert result.commit_id == generate(b"world" + b"msg")
        assert [(f.path, f.outcome) for f in result.files] == [
            ("a.txt", Outcome.FILE_UNREADABLE_AT_COMMIT_TIME),
            ("b.txt", Outcome.CAPTURED),
        ]
        assert not store.snapshot_file_exists(result.commit_id, "a.txt")
        assert store.snapshot_file_exists(result.commit_id, "b.txt")

    def test_identical_commits_share_id(self, engine, tracked, index):
        """Same content and message collide; both records are kept."""
        first = engine.commit("same")
        second = engine.commit("same")

        assert first.commit_id == second.commit_id
        assert len(list(index.iter_commit_records())) == 2

    def test_content_change_changes_id(self, engine, tracked, project):
        first = engine.commit("msg")
        (project / "a.txt").write_text("hello again")

        second = engine.commit("msg")

        assert first.commit_id != second.commit_id

    def test_multiline_message_is_folded(self, engine, tracked, index):
        result = engine.commit("line one\nline two")

        assert result.record.message == "line one line two"
        assert [r.message for r in index.iter_commit_records()] == ["line one line two"]


class TestCheckout:
    def test_unknown_commit(self, engine, tracked, project):
        result = engine.checkout("nonexistent")

        assert not result.success
        assert result.outcome is Outcome.COMMIT_NOT_FOUND
        assert (project / "a.txt").read_text() == "hello"
        assert (project / "b.txt").read_text() == "world"

    def test_restores_deleted_file(self, engine, tracked, project):
        commit = engine.commit("msg")
        (project / "a.txt").unlink()

        engine.checkout(commit.commit_id)

        assert (project / "a.txt").read_text() == "hello"

    def test_file_tracked_after_commit_is_left_alone(self, engine, index, project):
        index.append_tracked_file("a.txt")
        commit = engine.commit("only a")
        index.append_tracked_file("b.txt")
        (project / "b.txt").write_text("local edit")

        result = engine.checkout(commit.commit_id)

        assert result.success
        assert result.degraded
        assert [(f.path, f.outcome) for f in result.files] == [
            ("a.txt", Outcome.RESTORED),
            ("b.txt", Outcome.FILE_MISSING_FROM_SNAPSHOT),
        ]
        assert (project / "b.txt").read_text() == "local edit"

    def test_untracked_snapshot_files_are_not_restored(self, engine, tracked, index, project):
        """Restoration follows the current tracked set, not the snapshot contents."""
        commit = engine.commit("both")
        index.path.write_text(index.path.read_text().replace("b.txt\n", "", 1))
        (project / "b.txt").write_text("local edit")

        result = engine.checkout(commit.commit_id)

        assert result.restored == ["a.txt"]
        assert (project / "b.txt").read_text() == "local edit"


def test_current_timestamp_matches_ctime():
    assert current_timestamp(FIXED_NOW) == "Mon Oct 19 17:25:00 2026"


def test_normalize_message():
    assert normalize_message("a\r\nb\rc\nd") == "a b c d"
    assert normalize_message("plain") == "plain"
