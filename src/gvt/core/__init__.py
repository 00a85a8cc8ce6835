"""Core operations layer for GVT.

This module provides the user-level version control operations built on top
of the repository engine: tracking, detaching and committing files, checking
out versions and listing history.
"""

from gvt.core.operations import (
    InvalidVersionError,
    WorkingFileNotFoundError,
    checkout,
    commit_file,
    detach_file,
    history,
    track_file,
)

__all__ = [
    "track_file",
    "detach_file",
    "commit_file",
    "checkout",
    "history",
    "InvalidVersionError",
    "WorkingFileNotFoundError",
]
