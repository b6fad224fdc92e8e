"""Tests for AbsFile content, delete, move, copy and digest operations."""

import errno
import hashlib
import os
import stat
import sys
from datetime import UTC, datetime
from unittest.mock import patch

import pytest

from diskpath.core import AbsDir, AbsFile, FileAttributes
from diskpath.exceptions import DigestSourceUnavailableError, NotAFilePathError

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="POSIX permission bits"
)


def _tmp_leftovers(directory: AbsDir) -> list[str]:
    return [f.name for f in directory.list_files("*-tmp")]


class TestAtomicWrite:
    """Tests for write_stream and the helpers built on it."""

    def test_write_and_read_text(self, root: AbsDir):
        """Test text is written as UTF-8 and read back."""
        target = root.combine_file("hello.txt")

        target.write_text("héllo")

        assert target.read_text() == "héllo"
        assert target.read_bytes() == "héllo".encode()

    def test_write_creates_parent(self, root: AbsDir):
        """Test missing parent directories are created."""
        target = root.combine_file("a", "b", "c.txt")

        target.write_bytes(b"x")

        assert target.exists()

    def test_reader_never_sees_partial_content(self, root: AbsDir):
        """Test a read during the write observes only the old content."""
        target = root.combine_file("data.txt")
        target.write_text("old content")
        observed = []

        def action(stream):
            stream.write(b"new ")
            observed.append(target.read_text())
            stream.write(b"content")
            observed.append(target.read_text())

        target.write_stream(action)

        assert observed == ["old content", "old content"]
        assert target.read_text() == "new content"

    def test_failed_write_leaves_target_intact(self, root: AbsDir):
        """Test an exception in the action keeps the old file and no temp."""
        target = root.combine_file("data.txt")
        target.write_text("keep me")

        def action(stream):
            stream.write(b"half")
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            target.write_stream(action)

        assert target.read_text() == "keep me"
        assert _tmp_leftovers(root) == []

    def test_failed_rename_removes_temp(self, root: AbsDir):
        """Test the temp file is cleaned up when the replace fails."""
        target = root.combine_file("data.txt")
        target.write_text("keep me")

        with (
            patch(
                "diskpath.core.host.replace",
                side_effect=OSError(errno.EXDEV, "cross-device"),
            ),
            pytest.raises(OSError, match="cross-device"),
        ):
            target.write_text("lost")

        assert target.read_text() == "keep me"
        assert _tmp_leftovers(root) == []

    def test_write_over_directory_is_rejected(self, root: AbsDir):
        """Test writing where a directory exists raises."""
        root.combine_dir("taken").create_directory()

        with pytest.raises(NotAFilePathError):
            root.combine_file("taken").write_text("x")

    @posix_only
    def test_write_keeps_read_only_flag(self, root: AbsDir):
        """Test replacing a read-only file keeps it read-only."""
        target = root.combine_file("locked.txt")
        target.write_text_read_only("v1")
        assert target.is_read_only()

        target.write_text("v2")

        assert target.read_text() == "v2"
        assert target.is_read_only()

    @posix_only
    @pytest.mark.parametrize("mode", [0o600, 0o755, 0o400])
    def test_write_keeps_permission_bits(self, root: AbsDir, mode: int):
        """Test replacing a file keeps its exact mode, never a wider one."""
        target = root.combine_file("kept.sh")
        target.write_text("v1")
        os.chmod(target, mode)

        target.write_text("v2")

        assert target.read_text() == "v2"
        assert stat.S_IMODE(os.stat(target).st_mode) == mode
        assert _tmp_leftovers(root) == []


class TestDeleteFile:
    """Tests for delete_file."""

    def test_delete_missing_file_is_not_an_error(self, root: AbsDir):
        """Test deleting an absent file succeeds silently."""
        root.combine_file("ghost.txt").delete_file()

    @posix_only
    def test_delete_read_only_file(self, root: AbsDir):
        """Test a read-only file is deleted."""
        target = root.combine_file("ro.txt")
        target.write_bytes_read_only(b"x")

        target.delete_file()

        assert not target.exists()

    def test_delete_directory_path_raises(self, root: AbsDir):
        """Test delete_file refuses a directory."""
        root.combine_dir("folder").create_directory()

        with pytest.raises(NotAFilePathError):
            root.combine_file("folder").delete_file()

    def test_transient_error_retried_once(self, root: AbsDir):
        """Test one transient failure is absorbed by a single retry."""
        target = root.combine_file("busy.txt")
        target.write_text("x")
        real_remove = os.remove

        with (
            patch(
                "diskpath.core.host.remove_file",
                side_effect=[PermissionError(errno.EACCES, "locked"), None],
            ) as remove,
            patch("diskpath.core.file.time.sleep") as sleep,
        ):
            target.delete_file()

        assert remove.call_count == 2
        sleep.assert_called_once_with(0.5)
        real_remove(target.path)

    def test_second_failure_raises_first_error(self, root: AbsDir):
        """Test the first error surfaces when the retry also fails."""
        target = root.combine_file("busy.txt")
        target.write_text("x")
        first = PermissionError(errno.EACCES, "first")
        second = PermissionError(errno.EACCES, "second")

        with (
            patch("diskpath.core.host.remove_file", side_effect=[first, second]),
            patch("diskpath.core.file.time.sleep"),
            pytest.raises(PermissionError) as excinfo,
        ):
            target.delete_file()

        assert excinfo.value is first

    def test_non_transient_error_propagates_immediately(self, root: AbsDir):
        """Test errors other than contention are not retried."""
        target = root.combine_file("x.txt")
        target.write_text("x")

        with (
            patch(
                "diskpath.core.host.remove_file",
                side_effect=OSError(errno.EIO, "io"),
            ) as remove,
            pytest.raises(OSError, match="io"),
        ):
            target.delete_file()

        assert remove.call_count == 1


class TestMove:
    """Tests for AbsFile.move."""

    def test_move_into_directory(self, root: AbsDir):
        """Test moving into a directory keeps the name."""
        source = root.combine_file("a.txt")
        source.write_text("payload")
        target_dir = root.combine_dir("dest")

        moved = source.move(target_dir)

        assert moved == target_dir.combine_file("a.txt")
        assert moved.read_text() == "payload"
        assert not source.exists()

    def test_move_refuses_existing_target(self, root: AbsDir):
        """Test an existing target is never overwritten."""
        source = root.combine_file("a.txt")
        source.write_text("new")
        target = root.combine_file("b.txt")
        target.write_text("old")

        with pytest.raises(FileExistsError):
            source.move(target)

        assert target.read_text() == "old"


class TestCopy:
    """Tests for the attribute-preserving copy."""

    def test_copy_into_directory_keeps_content_and_mtime(self, root: AbsDir):
        """Test copying src/a.txt into dst keeps content and last-write time."""
        source = root.combine_file("src", "a.txt")
        source.write_text("hello")
        source.set_last_write_time(datetime(2020, 5, 17, 8, 30, tzinfo=UTC))
        destination_dir = root.combine_dir("dst")
        destination_dir.create_directory()

        copied = source.copy_to(destination_dir)

        assert copied == destination_dir.combine_file("a.txt")
        assert copied.read_text() == "hello"
        assert os.stat(copied).st_mtime_ns == os.stat(source).st_mtime_ns

    def test_copy_overwrites_target_file(self, root: AbsDir):
        """Test an existing target file is replaced."""
        source = root.combine_file("a.txt")
        source.write_text("new")
        target = root.combine_file("b.txt")
        target.write_text("old")

        source.copy_to(target)

        assert target.read_text() == "new"

    @posix_only
    def test_copy_read_only_source(self, root: AbsDir):
        """Test a read-only source yields a read-only target with its mtime."""
        source = root.combine_file("ro.txt")
        source.write_text_read_only("frozen")
        target = root.combine_file("copy.txt")
        target.write_text_read_only("old")

        source.copy_to(target)

        assert target.read_text() == "frozen"
        assert target.is_read_only()
        assert target.last_write_time() == source.last_write_time()


class TestDigest:
    """Tests for content digests."""

    def test_sha1_and_sha256(self, root: AbsDir):
        """Test known digests are returned as uppercase hex."""
        file = root.combine_file("hello.txt")
        file.write_bytes(b"hello")

        assert file.content_sha1() == "AAF4C61DDCC5E8A2DABEDE0F3B482CD9AEA9434D"
        assert file.content_sha256() == (
            "2CF24DBA5FB0A30E26E83B2AC5B9E29E1B161E5C1FA7425E73043362938B9824"
        )

    def test_algorithm_constructor(self, root: AbsDir):
        """Test a hashlib constructor can be passed directly."""
        file = root.combine_file("hello.txt")
        file.write_bytes(b"hello")

        assert file.content_digest(hashlib.md5) == "5D41402ABC4B2A76B9719D911017C592"

    def test_large_file_streams(self, root: AbsDir):
        """Test multi-chunk files hash like a one-shot digest."""
        payload = os.urandom(200 * 1024)
        file = root.combine_file("big.bin")
        file.write_bytes(payload)

        assert file.content_digest("sha256") == (
            hashlib.sha256(payload).hexdigest().upper()
        )

    def test_missing_file(self, root: AbsDir):
        """Test a missing source raises DigestSourceUnavailableError."""
        with pytest.raises(DigestSourceUnavailableError) as excinfo:
            root.combine_file("missing.bin").content_sha1()

        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_unknown_algorithm(self, root: AbsDir):
        """Test an unsupported name is a ValueError."""
        file = root.combine_file("a.txt")
        file.write_bytes(b"a")

        with pytest.raises(ValueError, match="Unsupported digest"):
            file.content_digest("crc32")


class TestTimestampsAndAttributes:
    """Tests for timestamps and attribute flags."""

    def test_last_write_time_round_trip(self, root: AbsDir):
        """Test set_last_write_time and last_write_time agree."""
        file = root.combine_file("t.txt")
        file.write_text("t")
        when = datetime(2021, 3, 4, 5, 6, 7, tzinfo=UTC)

        file.set_last_write_time(when)

        assert file.last_write_time() == when

    def test_naive_datetime_is_utc(self, root: AbsDir):
        """Test a naive datetime is interpreted as UTC."""
        file = root.combine_file("t.txt")
        file.write_text("t")

        file.set_last_write_time(datetime(2021, 3, 4, 5, 6, 7))

        assert file.last_write_time() == datetime(2021, 3, 4, 5, 6, 7, tzinfo=UTC)

    def test_set_last_write_time_from(self, root: AbsDir):
        """Test the time is copied from another file."""
        source = root.combine_file("s.txt")
        source.write_text("s")
        source.set_last_write_time(datetime(2019, 1, 1, tzinfo=UTC))
        target = root.combine_file("t.txt")
        target.write_text("t")

        target.set_last_write_time_from(source)

        assert target.last_write_time() == source.last_write_time()

    @posix_only
    def test_read_only_flag(self, root: AbsDir):
        """Test setting and clearing READ_ONLY."""
        file = root.combine_file("f.txt")
        file.write_text("f")
        assert file.attributes() == FileAttributes.NORMAL

        file.set_attributes(FileAttributes.READ_ONLY)
        assert file.is_read_only()
        assert not os.stat(file).st_mode & 0o222

        file.clear_read_only()
        assert not file.is_read_only()
