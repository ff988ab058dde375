"""
Integration tests for DeduplicationCommand — the orchestration layer between CLI and core.
Covers the end-to-end scenarios: dry run, deletion, thresholds, zero-byte files, idempotence.
"""
import pytest
from unittest import mock
from pathlib import Path
from dupecull import DeduplicationParams, DeduplicationCommand, TraversalOrder
from dupecull.core.models import Stage
from dupecull.services import file_service
from dupecull.services.file_service import FileService


class TestEndToEndScenarios:

    def test_two_identical_files_dry_run(self, temp_dir):
        (temp_dir / "a.txt").write_text("hello")
        (temp_dir / "b.txt").write_text("hello")
        params = DeduplicationParams(roots=[str(temp_dir)])

        results, stats = DeduplicationCommand().execute(params)

        assert len(results) == 1
        assert results[0].duplicate_count == 2
        assert stats.freed_files == 1
        assert stats.freed_bytes == 5
        # dry run touches nothing
        assert (temp_dir / "a.txt").exists() and (temp_dir / "b.txt").exists()

    def test_two_identical_files_with_deletion(self, temp_dir):
        (temp_dir / "a.txt").write_text("hello")
        (temp_dir / "b.txt").write_text("hello")
        params = DeduplicationParams(roots=[str(temp_dir)], delete_files=True)

        results, stats = DeduplicationCommand().execute(params)

        remaining = [p for p in ("a.txt", "b.txt") if (temp_dir / p).exists()]
        assert len(remaining) == 1
        assert str(temp_dir / remaining[0]) == results[0].survivor
        assert stats.freed_bytes == 5
        assert stats.freed_files == 1

    def test_same_size_different_content(self, temp_dir):
        (temp_dir / "a.txt").write_text("hello")
        (temp_dir / "b.txt").write_text("world")
        params = DeduplicationParams(roots=[str(temp_dir)], delete_files=True)

        results, stats = DeduplicationCommand().execute(params)

        assert results == []
        assert stats.stage_stats[Stage.FIRST.value]["files"] == 2  # reached full hashing
        assert stats.freed_files == 0
        assert (temp_dir / "a.txt").exists() and (temp_dir / "b.txt").exists()

    def test_three_copies_threshold_three(self, temp_dir):
        for name in ("a.txt", "b.txt", "c.txt"):
            (temp_dir / name).write_text("triple")
        params = DeduplicationParams(roots=[str(temp_dir)], min_count=3, delete_files=True)

        results, stats = DeduplicationCommand().execute(params)

        assert len(results) == 1
        assert len(results[0].removed) == 2
        assert stats.freed_files == 2
        assert sum(1 for n in ("a.txt", "b.txt", "c.txt") if (temp_dir / n).exists()) == 1

    def test_zero_byte_file_never_reported(self, test_files, temp_dir):
        params = DeduplicationParams(roots=[str(temp_dir)])

        results, _ = DeduplicationCommand().execute(params)

        reported = {p for r in results for p in r.files}
        assert str(test_files["empty"]) not in reported
        assert str(test_files["empty2"]) not in reported

    def test_dry_run_is_idempotent(self, test_files, temp_dir):
        params = DeduplicationParams(roots=[str(temp_dir)])

        first, _ = DeduplicationCommand().execute(params)
        second, _ = DeduplicationCommand().execute(params)

        assert [(r.checksum, r.survivor, r.removed) for r in first] == \
               [(r.checksum, r.survivor, r.removed) for r in second]

    def test_hard_links_not_deleted_as_duplicates(self, hard_link, temp_dir):
        params = DeduplicationParams(roots=[str(temp_dir)], delete_files=True)

        results, _ = DeduplicationCommand().execute(params)

        original, link = hard_link
        assert results == []
        assert original.exists() and link.exists()


class TestDeduplicationCommand:
    """Test command orchestration logic."""

    def test_groups_below_count_not_reported(self, temp_dir):
        """Same size bucket of 3 where only 2 match fully: not a group for count=3."""
        (temp_dir / "a").write_bytes(b"same")
        (temp_dir / "b").write_bytes(b"same")
        (temp_dir / "c").write_bytes(b"diff")
        params = DeduplicationParams(roots=[str(temp_dir)], min_count=3)

        results, stats = DeduplicationCommand().execute(params)

        assert results == []
        assert stats.freed_files == 0

    def test_survivor_follows_traversal_order(self, temp_dir):
        sub = temp_dir / "a_dir"
        sub.mkdir()
        (sub / "deep.txt").write_text("content")
        (temp_dir / "z_shallow.txt").write_text("content")

        by_name, _ = DeduplicationCommand().execute(
            DeduplicationParams(roots=[str(temp_dir)], order=TraversalOrder.NAME))
        by_depth, _ = DeduplicationCommand().execute(
            DeduplicationParams(roots=[str(temp_dir)], order=TraversalOrder.DEPTH))

        assert by_name[0].survivor == str(sub / "deep.txt")
        assert by_depth[0].survivor == str(temp_dir / "z_shallow.txt")

    def test_survivor_sort_key_is_injectable(self, temp_dir):
        (temp_dir / "long_name.txt").write_text("content")
        (temp_dir / "s.txt").write_text("content")

        results, _ = DeduplicationCommand(survivor_sort_key=len).execute(
            DeduplicationParams(roots=[str(temp_dir)], order=TraversalOrder.NAME))

        assert results[0].survivor == str(temp_dir / "s.txt")

    def test_callbacks_receive_groups_and_bucket_totals(self, test_files, temp_dir):
        groups, buckets, stages = [], [], []
        params = DeduplicationParams(roots=[str(temp_dir)])

        DeduplicationCommand().execute(
            params,
            stage_listener=lambda stage, data: stages.append((stage, data)),
            group_callback=groups.append,
            bucket_callback=buckets.append,
        )

        assert len(groups) == 2
        assert [b.size for b in buckets] == [3000, 2048, 1024]
        assert buckets[-1].files_remaining == 0
        assert buckets[-1].bytes_remaining == 0
        assert buckets[-1].freed_files == 3  # 2 from the 1KB set, 1 from the 2KB pair
        assert buckets[-1].freed_bytes == 2 * 1024 + 2048
        assert stages[0] == (Stage.SIZE.value, {"status": "started"})

    def test_trash_mode_uses_send2trash(self, temp_dir):
        (temp_dir / "a.txt").write_text("hello")
        (temp_dir / "b.txt").write_text("hello")
        params = DeduplicationParams(roots=[str(temp_dir)], delete_files=True, use_trash=True)

        with mock.patch.object(file_service, "send2trash") as mock_trash:
            results, _ = DeduplicationCommand().execute(params)

        mock_trash.assert_called_once_with(results[0].removed[0])

    def test_deletion_failure_stops_run_and_keeps_ledger(self, temp_dir):
        for name in ("a.txt", "b.txt", "c.txt"):
            (temp_dir / name).write_text("hello")
        params = DeduplicationParams(roots=[str(temp_dir)], delete_files=True, order=TraversalOrder.NAME)

        calls = []

        def flaky_delete(path):
            calls.append(path)
            if len(calls) == 2:
                raise RuntimeError(f"Failed to delete {path}")
            Path(path).unlink()

        command = DeduplicationCommand()
        with mock.patch.object(FileService, "delete_file", side_effect=flaky_delete):
            with pytest.raises(RuntimeError, match="Failed to delete"):
                command.execute(params)

        assert command.ledger.removed_paths == [str(temp_dir / "b.txt")]
        assert not (temp_dir / "b.txt").exists()
        assert (temp_dir / "c.txt").exists()

    def test_read_failure_aborts_run(self, test_files, temp_dir, monkeypatch):
        from dupecull.core import hasher

        def broken_open(*args, **kwargs):
            raise PermissionError("Permission denied")

        monkeypatch.setattr(hasher, "open", broken_open, raising=False)

        with pytest.raises(RuntimeError, match="Permission denied"):
            DeduplicationCommand().execute(DeduplicationParams(roots=[str(temp_dir)]))
