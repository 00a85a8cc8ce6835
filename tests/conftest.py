"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from gvt.storage import FileSystemWorkspace, InMemoryWorkspace, Repository


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Create a working directory with a few sample files."""
    root = tmp_path / "workspace"
    root.mkdir()

    (root / "a.txt").write_text("alpha v1\n")
    (root / "b.txt").write_text("bravo v1\n")
    (root / "docs").mkdir()
    (root / "docs" / "notes.md").write_text("# Notes\n\nFirst draft.\n")

    return root


@pytest.fixture
def fs_repo(workspace_root: Path) -> Repository:
    """Create an initialized repository on disk."""
    repo = Repository(FileSystemWorkspace(workspace_root))
    repo.initialize()
    return repo


@pytest.fixture
def memory_workspace() -> InMemoryWorkspace:
    """Create an in-memory workspace with sample files."""
    ws = InMemoryWorkspace()
    ws.write_text("a.txt", "alpha v1\n")
    ws.write_text("b.txt", "bravo v1\n")
    return ws


@pytest.fixture
def memory_repo(memory_workspace: InMemoryWorkspace) -> Repository:
    """Create an initialized repository held in memory."""
    repo = Repository(memory_workspace)
    repo.initialize()
    return repo
