"""Tests for File content, metadata and single-entry operations."""

import errno
import io
import logging
import os

import pytest

from crossfs import (
    DeleteError,
    File,
    FileSystemError,
    MemoryHost,
    MetadataError,
    NativeHost,
    OpenError,
    Path,
    ReadError,
    WriteError,
)


def _exdev(src, dst):
    raise OSError(errno.EXDEV, "Invalid cross-device link", src)


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class TestFileContent:
    """Test text and binary round trips."""

    def test_text_round_trip(self, tmp_path):
        """Text written is the text read back; size is its byte length."""
        f = File(str(tmp_path / "hello.txt"))
        f.write_text("Hello from crossfs!\nThis is a test file.")
        assert f.read_text() == "Hello from crossfs!\nThis is a test file."
        assert f.size() == len(b"Hello from crossfs!\nThis is a test file.")

    def test_text_size_counts_bytes(self, tmp_path):
        """size() counts encoded bytes, not characters."""
        f = File(tmp_path / "unicode.txt")
        f.write_text("h\u00e9llo \u2713")
        assert f.read_text() == "h\u00e9llo \u2713"
        assert f.size() == len("h\u00e9llo \u2713".encode("utf-8"))

    def test_text_keeps_line_endings(self, tmp_path):
        """No newline translation on either side."""
        f = File(tmp_path / "crlf.txt")
        f.write_text("a\r\nb\nc\r")
        assert f.read_bytes() == b"a\r\nb\nc\r"
        assert f.read_text() == "a\r\nb\nc\r"

    def test_text_preserves_undecodable_bytes(self, tmp_path):
        """Bytes that are not UTF-8 survive a text round trip."""
        f = File(tmp_path / "latin.txt")
        f.write_bytes(b"caf\xe9")
        text = f.read_text()
        f.write_text(text)
        assert f.read_bytes() == b"caf\xe9"

    def test_binary_round_trip_with_zero_bytes(self, tmp_path):
        """Every byte value, zeros included, is preserved."""
        payload = bytes(range(256)) + b"\x00\x00"
        f = File(tmp_path / "blob.bin")
        f.write_bytes(payload)
        assert f.read_bytes() == payload
        assert f.size() == len(payload)

    def test_write_bytes_accepts_sequences(self, tmp_path):
        """bytearray and lists of ints are accepted."""
        f = File(tmp_path / "seq.bin")
        f.write_bytes(bytearray(b"\x01\x02"))
        assert f.read_bytes() == b"\x01\x02"
        f.write_bytes([0, 255, 7])
        assert f.read_bytes() == b"\x00\xff\x07"

    def test_write_truncates(self, tmp_path):
        """Writing replaces the previous content entirely."""
        f = File(tmp_path / "over.txt")
        f.write_text("a much longer first version")
        f.write_text("x")
        assert f.read_text() == "x"
        assert f.size() == 1

    def test_empty_file(self, tmp_path):
        """An empty file reads as empty."""
        f = File(tmp_path / "empty")
        f.write_bytes(b"")
        assert f.read_bytes() == b""
        assert f.read_text() == ""
        assert f.size() == 0

    def test_read_missing_raises_open_error(self, tmp_path):
        """Reading a missing file raises OpenError with context."""
        path = str(Path(tmp_path / "missing.txt"))
        with pytest.raises(OpenError) as info:
            File(path).read_text()
        assert info.value.operation == "read"
        assert info.value.path == path
        assert isinstance(info.value.__cause__, OSError)
        assert path in str(info.value)

    def test_read_directory_raises_open_error(self, tmp_path):
        """A directory cannot be read as a file."""
        with pytest.raises(OpenError):
            File(tmp_path).read_bytes()

    def test_write_into_missing_directory_raises(self, tmp_path):
        """Parents are not created on write."""
        with pytest.raises(OpenError) as info:
            File(tmp_path / "nope" / "f.txt").write_text("x")
        assert info.value.operation == "write"

    def test_errors_share_a_base_class(self, tmp_path):
        """All explicit failures are FileSystemErrors."""
        with pytest.raises(FileSystemError):
            File(tmp_path / "missing").read_bytes()

    def test_memory_host_round_trip(self, windows_host):
        """Content operations work on an in-memory Windows host."""
        f = File("C:/notes.txt", windows_host)
        f.write_text("memo")
        assert windows_host.files["C:\\notes.txt"] == b"memo"
        assert f.read_text() == "memo"
        assert f.size() == 4


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class TestFileMetadata:
    """Test exists() and size()."""

    def test_exists_for_file(self, tmp_path):
        """An existing regular file exists."""
        (tmp_path / "f").write_bytes(b"")
        assert File(tmp_path / "f").exists() is True

    def test_exists_false_for_directory(self, tmp_path):
        """A directory is not a File."""
        assert File(tmp_path).exists() is False

    def test_exists_false_for_missing(self, tmp_path):
        """A missing path is not a File."""
        assert File(tmp_path / "missing").exists() is False

    def test_size_missing_raises_metadata_error(self, tmp_path):
        """size() on a vanished path raises MetadataError."""
        with pytest.raises(MetadataError) as info:
            File(tmp_path / "gone").size()
        assert info.value.operation == "size"

    def test_no_caching(self, tmp_path):
        """Each call sees the current state of the disk."""
        f = File(tmp_path / "f")
        assert f.exists() is False
        (tmp_path / "f").write_bytes(b"abc")
        assert f.exists() is True
        assert f.size() == 3
        (tmp_path / "f").write_bytes(b"abcdef")
        assert f.size() == 6


# ---------------------------------------------------------------------------
# copy / move / remove
# ---------------------------------------------------------------------------


class TestFileCopy:
    """Test File.copy()."""

    def test_copy(self, tmp_path):
        """The copy has the same content; the source is unchanged."""
        src = File(tmp_path / "a.txt")
        src.write_text("content")
        src.copy(tmp_path / "b.txt")
        dest = File(tmp_path / "b.txt")
        assert dest.exists() is True
        assert dest.read_text() == src.read_text()
        assert src.read_text() == "content"

    def test_copy_overwrites(self, tmp_path):
        """An existing destination is replaced."""
        src = File(tmp_path / "a.bin")
        src.write_bytes(b"\x00new")
        File(tmp_path / "b.bin").write_bytes(b"old old old")
        src.copy(Path(tmp_path / "b.bin"))
        assert File(tmp_path / "b.bin").read_bytes() == b"\x00new"

    def test_copy_missing_source(self, tmp_path):
        """A missing source raises OpenError."""
        with pytest.raises(OpenError) as info:
            File(tmp_path / "missing").copy(tmp_path / "dest")
        assert info.value.operation == "copy"
        assert File(tmp_path / "dest").exists() is False

    def test_copy_unwritable_destination(self, tmp_path):
        """A destination that cannot be opened raises OpenError naming it."""
        src = File(tmp_path / "a.txt")
        src.write_text("x")
        dest = Path(tmp_path / "missing-dir" / "b.txt")
        with pytest.raises(OpenError) as info:
            src.copy(dest)
        assert info.value.path == str(dest)

    def test_copy_onto_itself(self, tmp_path):
        """Copying a file onto its own path leaves the content intact."""
        f = File(tmp_path / "same.txt")
        f.write_text("payload")
        f.copy(tmp_path / "same.txt")
        assert f.read_text() == "payload"

    @pytest.mark.skipif(os.name == "nt", reason="hard links need NTFS")
    def test_copy_onto_hard_link(self, tmp_path):
        """A second name for the same file counts as the same file."""
        f = File(tmp_path / "a.txt")
        f.write_text("payload")
        os.link(tmp_path / "a.txt", tmp_path / "b.txt")
        f.copy(tmp_path / "b.txt")
        assert f.read_text() == "payload"

    def test_copy_onto_itself_in_memory(self, windows_host):
        """The same holds on a memory host, whatever separator is used."""
        f = File("C:/same.txt", windows_host)
        f.write_text("payload")
        f.copy("C:\\same.txt")
        assert windows_host.files["C:\\same.txt"] == b"payload"

    def test_copy_missing_source_onto_itself(self, posix_host):
        """A missing source is still an OpenError when the paths match."""
        with pytest.raises(OpenError):
            File("/missing", posix_host).copy("/missing")

    def test_copy_read_failure_names_source(self, posix_host, monkeypatch):
        """A failure while reading the source is a ReadError on the source."""
        File("/src.bin", posix_host).write_bytes(b"data")
        original_open = posix_host.open

        class FailingReader(io.BytesIO):
            def read(self, *args):
                raise OSError(errno.EIO, "Input/output error")

        def open_(path, mode):
            if mode == "rb":
                return FailingReader()
            return original_open(path, mode)

        monkeypatch.setattr(posix_host, "open", open_)

        with pytest.raises(ReadError) as info:
            File("/src.bin", posix_host).copy("/dest.bin")
        assert info.value.path == "/src.bin"
        assert info.value.operation == "copy"

    def test_copy_write_failure_names_destination(self, posix_host, monkeypatch):
        """A failure while writing is a WriteError on the destination."""
        File("/src.bin", posix_host).write_bytes(b"data")
        original_open = posix_host.open

        class FailingWriter(io.BytesIO):
            def write(self, data):
                raise OSError(errno.ENOSPC, "No space left on device")

        def open_(path, mode):
            if mode == "wb":
                return FailingWriter()
            return original_open(path, mode)

        monkeypatch.setattr(posix_host, "open", open_)

        with pytest.raises(WriteError) as info:
            File("/src.bin", posix_host).copy("/dest.bin")
        assert info.value.path == "/dest.bin"

    def test_copy_between_hosts(self, tmp_path, posix_host):
        """A copy can cross from one host to another."""
        src = File("/report.txt", posix_host)
        src.write_text("from memory")
        src.copy(Path(tmp_path / "report.txt", NativeHost()))
        assert (tmp_path / "report.txt").read_text() == "from memory"


class TestFileMove:
    """Test File.move() and its copy-then-delete fallback."""

    def test_move(self, tmp_path):
        """After a move only the destination exists, with the content."""
        src = File(tmp_path / "a.txt")
        src.write_text("moving")
        src.move(tmp_path / "b.txt")
        assert src.exists() is False
        assert File(tmp_path / "b.txt").exists() is True
        assert File(tmp_path / "b.txt").read_text() == "moving"

    def test_move_falls_back_when_rename_fails(self, tmp_path, monkeypatch, caplog):
        """A failed rename is replaced by copy then delete, with a warning."""
        host = NativeHost()
        monkeypatch.setattr(host, "rename", _exdev)
        src = File(str(tmp_path / "a.bin"), host)
        src.write_bytes(b"\x00\x01payload")

        with caplog.at_level(logging.WARNING, logger="crossfs.file"):
            src.move(str(tmp_path / "b.bin"))

        assert src.exists() is False
        assert File(str(tmp_path / "b.bin"), host).read_bytes() == b"\x00\x01payload"
        assert "falling back to copy and delete" in caplog.text

    def test_fallback_leaves_both_when_delete_fails(self, posix_host, monkeypatch):
        """If the source cannot be deleted, both endpoints remain."""
        monkeypatch.setattr(posix_host, "rename", _exdev)

        def deny(path):
            raise PermissionError(errno.EACCES, "Permission denied", path)

        monkeypatch.setattr(posix_host, "unlink", deny)
        src = File("/a.txt", posix_host)
        src.write_text("both")

        with pytest.raises(DeleteError):
            src.move("/b.txt")

        assert src.read_text() == "both"
        assert File("/b.txt", posix_host).read_text() == "both"

    def test_move_onto_itself_keeps_file(self, posix_host, monkeypatch):
        """A fallback move onto the same path does not delete the file."""
        monkeypatch.setattr(posix_host, "rename", _exdev)
        src = File("/a.txt", posix_host)
        src.write_text("stay")
        src.move("/a.txt")
        assert src.read_text() == "stay"

    def test_move_missing_source(self, tmp_path):
        """Moving a missing file fails in the fallback copy."""
        with pytest.raises(OpenError):
            File(tmp_path / "missing").move(tmp_path / "dest")

    def test_move_between_hosts(self, tmp_path):
        """Crossing hosts always takes the fallback."""
        memory = MemoryHost()
        src = File(Path(tmp_path / "a.txt"))
        src.write_text("travel")
        src.move(Path("/a.txt", memory))
        assert src.exists() is False
        assert memory.files["/a.txt"] == b"travel"


class TestFileRemove:
    """Test File.remove()."""

    def test_remove(self, tmp_path):
        """A removed file no longer exists."""
        f = File(tmp_path / "a.txt")
        f.write_text("bye")
        f.remove()
        assert f.exists() is False
        assert Path(tmp_path / "a.txt").exists() is False

    def test_remove_missing(self, tmp_path):
        """Removing a missing file raises DeleteError."""
        with pytest.raises(DeleteError) as info:
            File(tmp_path / "missing").remove()
        assert info.value.operation == "remove"

    def test_remove_directory(self, tmp_path):
        """A directory cannot be removed as a File."""
        (tmp_path / "sub").mkdir()
        with pytest.raises(DeleteError):
            File(tmp_path / "sub").remove()
        assert (tmp_path / "sub").is_dir()
