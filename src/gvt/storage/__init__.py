"""Storage layer for GVT.

This module provides the workspace abstraction, the history log and manifest
formats, and the version repository engine.
"""

from gvt.storage.history_log import HistoryFormatError
from gvt.storage.repository import (
    AlreadyInitializedError,
    NotInitializedError,
    Repository,
    RepositoryError,
    RepositoryIOError,
    VersionDirectoryMissingError,
)
from gvt.storage.workspace import FileSystemWorkspace, InMemoryWorkspace, Workspace

__all__ = [
    "Repository",
    "RepositoryError",
    "AlreadyInitializedError",
    "NotInitializedError",
    "VersionDirectoryMissingError",
    "RepositoryIOError",
    "HistoryFormatError",
    "Workspace",
    "FileSystemWorkspace",
    "InMemoryWorkspace",
]
