"""Unit tests for Workspace implementations."""

from pathlib import Path

import pytest

from gvt.storage.workspace import FileSystemWorkspace, InMemoryWorkspace, Workspace


@pytest.fixture(params=["filesystem", "memory"])
def workspace(request, tmp_path: Path) -> Workspace:
    """Create each Workspace implementation in turn."""
    if request.param == "filesystem":
        return FileSystemWorkspace(tmp_path)
    return InMemoryWorkspace()


class TestWorkspaceContract:
    """Behaviour shared by every Workspace implementation."""

    def test_write_then_read(self, workspace: Workspace) -> None:
        workspace.write_bytes("file.bin", b"\x00\x01\x02")
        assert workspace.read_bytes("file.bin") == b"\x00\x01\x02"

    def test_text_helpers_use_utf8(self, workspace: Workspace) -> None:
        workspace.write_text("note.txt", "zażółć")
        assert workspace.read_bytes("note.txt") == "zażółć".encode("utf-8")
        assert workspace.read_text("note.txt") == "zażółć"

    def test_write_overwrites(self, workspace: Workspace) -> None:
        workspace.write_text("a.txt", "old")
        workspace.write_text("a.txt", "new")
        assert workspace.read_text("a.txt") == "new"

    def test_write_creates_parents(self, workspace: Workspace) -> None:
        workspace.write_text("deep/nested/file.txt", "x")

        assert workspace.is_dir("deep")
        assert workspace.is_dir("deep/nested")
        assert workspace.exists("deep/nested/file.txt")

    def test_exists_and_is_dir(self, workspace: Workspace) -> None:
        workspace.write_text("a.txt", "x")
        workspace.make_dir("sub")

        assert workspace.exists("a.txt")
        assert not workspace.is_dir("a.txt")
        assert workspace.exists("sub")
        assert workspace.is_dir("sub")
        assert not workspace.exists("missing.txt")

    def test_make_dir_is_idempotent(self, workspace: Workspace) -> None:
        workspace.make_dir("a/b")
        workspace.make_dir("a/b")
        assert workspace.is_dir("a/b")

    def test_read_missing_raises(self, workspace: Workspace) -> None:
        with pytest.raises(FileNotFoundError):
            workspace.read_bytes("missing.txt")

    def test_append_creates_and_appends(self, workspace: Workspace) -> None:
        workspace.make_dir("logs")
        workspace.append_text("logs/history.txt", "0|first\n")
        workspace.append_text("logs/history.txt", "1|second\n")

        assert workspace.read_text("logs/history.txt") == "0|first\n1|second\n"

    def test_copy(self, workspace: Workspace) -> None:
        workspace.write_text("src.txt", "payload")
        workspace.write_text("dst.txt", "stale")

        workspace.copy("src.txt", "dst.txt")

        assert workspace.read_text("dst.txt") == "payload"
        assert workspace.read_text("src.txt") == "payload"

    def test_copy_missing_source_raises(self, workspace: Workspace) -> None:
        with pytest.raises(FileNotFoundError):
            workspace.copy("missing.txt", "dst.txt")


class TestFileSystemWorkspace:
    """Behaviour specific to FileSystemWorkspace."""

    def test_paths_are_relative_to_root(self, tmp_path: Path) -> None:
        ws = FileSystemWorkspace(tmp_path)
        ws.write_text("a.txt", "hello")

        assert (tmp_path / "a.txt").read_text() == "hello"
        assert ws.resolve("a.txt") == tmp_path / "a.txt"

    def test_atomic_write_leaves_no_temp_files(self, tmp_path: Path) -> None:
        ws = FileSystemWorkspace(tmp_path)
        ws.write_text("a.txt", "one")
        ws.write_text("a.txt", "two")

        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.txt"]


class TestInMemoryWorkspace:
    """Behaviour specific to InMemoryWorkspace."""

    def test_root_always_exists(self) -> None:
        assert InMemoryWorkspace().is_dir(".")

    def test_paths_are_normalized(self) -> None:
        ws = InMemoryWorkspace()
        ws.write_text("./dir/a.txt", "x")

        assert ws.exists("dir/a.txt")
        assert "dir/a.txt" in ws.files

    def test_read_directory_raises(self) -> None:
        ws = InMemoryWorkspace()
        ws.make_dir("dir")
        with pytest.raises(IsADirectoryError):
            ws.read_bytes("dir")

    def test_make_dir_over_file_raises(self) -> None:
        ws = InMemoryWorkspace()
        ws.write_text("a.txt", "x")
        with pytest.raises(FileExistsError):
            ws.make_dir("a.txt")
