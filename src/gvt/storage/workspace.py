"""Workspace abstraction over the working directory.

Everything GVT reads or writes goes through a Workspace: the tracked files in
the working directory as well as the `.gvt/` repository data. Paths are
strings relative to the workspace root.

Two implementations are provided:

    FileSystemWorkspace   # a real directory on disk
    InMemoryWorkspace     # a dict of path -> bytes, for tests and dry runs
"""

import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Dict, Set


class Workspace(ABC):
    """Read/write access to files relative to a workspace root.

    Implementations raise OSError subclasses (FileNotFoundError,
    IsADirectoryError, PermissionError, ...) on failure, the same way the
    filesystem does.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at path."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Return True if path is an existing directory."""

    @abstractmethod
    def make_dir(self, path: str) -> None:
        """Create a directory and any missing parents.

        Does nothing if the directory already exists.
        """

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Read the full contents of a file."""

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        """Write a file, replacing any existing contents.

        Missing parent directories are created.
        """

    @abstractmethod
    def append_text(self, path: str, text: str) -> None:
        """Append UTF-8 text to a file in a single write, creating it if needed.

        Undecodable filename bytes carried as surrogate escapes are written
        back as the original bytes.
        """

    def read_text(self, path: str) -> str:
        return self.read_bytes(path).decode("utf-8", errors="surrogateescape")

    def write_text(self, path: str, text: str) -> None:
        self.write_bytes(path, text.encode("utf-8", errors="surrogateescape"))

    def copy(self, src: str, dst: str) -> None:
        """Copy src over dst."""
        self.write_bytes(dst, self.read_bytes(src))


class FileSystemWorkspace(Workspace):
    """Workspace backed by a directory on disk.

    Attributes:
        root: Workspace root directory

    Example:
        >>> ws = FileSystemWorkspace(Path.cwd())
        >>> ws.write_text("notes.txt", "hello")
        >>> ws.read_text("notes.txt")
        'hello'
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        """Get the absolute filesystem path for a workspace path."""
        return self.root / path

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def is_dir(self, path: str) -> bool:
        return self.resolve(path).is_dir()

    def make_dir(self, path: str) -> None:
        self.resolve(path).mkdir(parents=True, exist_ok=True)

    def read_bytes(self, path: str) -> bytes:
        return self.resolve(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        # Atomic write: tmp file -> rename
        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent,
            prefix=".tmp_",
            suffix=".gvt",
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, target)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def append_text(self, path: str, text: str) -> None:
        target = self.resolve(path)
        with open(target, "a", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(text)

    def copy(self, src: str, dst: str) -> None:
        target = self.resolve(dst)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.resolve(src), target)


class InMemoryWorkspace(Workspace):
    """Workspace held entirely in memory.

    Files live in a dict keyed by normalized POSIX path. The root directory
    always exists.
    """

    def __init__(self) -> None:
        self.files: Dict[str, bytes] = {}
        self.dirs: Set[str] = {"."}

    @staticmethod
    def _normalize(path: str) -> str:
        return PurePosixPath(path.replace("\\", "/")).as_posix()

    def _parents(self, path: str):
        return [p.as_posix() for p in PurePosixPath(path).parents]

    def exists(self, path: str) -> bool:
        key = self._normalize(path)
        return key in self.files or key in self.dirs

    def is_dir(self, path: str) -> bool:
        return self._normalize(path) in self.dirs

    def make_dir(self, path: str) -> None:
        key = self._normalize(path)
        if key in self.files:
            raise FileExistsError(f"File exists: {path}")
        self.dirs.add(key)
        self.dirs.update(self._parents(key))

    def read_bytes(self, path: str) -> bytes:
        key = self._normalize(path)
        if key in self.dirs:
            raise IsADirectoryError(f"Is a directory: {path}")
        try:
            return self.files[key]
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

    def write_bytes(self, path: str, data: bytes) -> None:
        key = self._normalize(path)
        if key in self.dirs:
            raise IsADirectoryError(f"Is a directory: {path}")
        self.dirs.update(self._parents(key))
        self.files[key] = bytes(data)

    def append_text(self, path: str, text: str) -> None:
        key = self._normalize(path)
        existing = self.files.get(key, b"")
        self.write_bytes(key, existing + text.encode("utf-8", errors="surrogateescape"))
