"""Version control operations on a repository.

Each mutating operation derives a new file set from the latest version,
builds the next Version and persists it. A version is appended to the
in-memory history only after it has been persisted, so memory never runs
ahead of the history log.

No-op requests (adding a tracked file, detaching or committing an untracked
one) return None without creating a version.
"""

import logging
from typing import FrozenSet, List, Optional

from gvt.constants import (
    DEFAULT_ADD_MESSAGE,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_DETACH_MESSAGE,
)
from gvt.models import Version
from gvt.storage.repository import NotInitializedError, Repository, RepositoryError

logger = logging.getLogger(__name__)


class WorkingFileNotFoundError(RepositoryError):
    """Raised when a file to add or commit is missing from the working directory."""


class InvalidVersionError(RepositoryError):
    """Raised when a requested version number is not in the history."""


def _latest(repo: Repository) -> Version:
    latest = repo.latest_version()
    if latest is None:
        raise NotInitializedError("Repository has no history. Run init first.")
    return latest


def _default_message(prefix: str, path: str) -> str:
    return f"{prefix} File: {path}"


def _create_version(
    repo: Repository, last: Version, message: str, files: FrozenSet[str]
) -> Version:
    new_version = Version(last.number + 1, message, files)
    repo.persist(new_version)
    repo.add_version(new_version)
    logger.debug(
        "Created version %d with %d tracked file(s)",
        new_version.number,
        len(new_version.files),
    )
    return new_version


def track_file(repo: Repository, path: str, message: Optional[str] = None) -> Optional[Version]:
    """Start tracking a file.

    Args:
        repo: Loaded repository
        path: Path of the file relative to the workspace root
        message: Version message (default: "File added successfully. File: <path>")

    Returns:
        The new version, or None if the file was already tracked

    Raises:
        WorkingFileNotFoundError: If the file does not exist
        NotInitializedError: If the repository has no history
        RepositoryIOError: If the version cannot be persisted
    """
    if not repo.workspace.exists(path):
        raise WorkingFileNotFoundError(f"File not found: {path}")

    last = _latest(repo)
    if path in last.files:
        logger.debug("File already tracked: %s", path)
        return None

    if message is None:
        message = _default_message(DEFAULT_ADD_MESSAGE, path)
    return _create_version(repo, last, message, last.files | {path})


def detach_file(repo: Repository, path: str, message: Optional[str] = None) -> Optional[Version]:
    """Stop tracking a file. The working copy is left in place.

    Returns:
        The new version, or None if the file was not tracked

    Raises:
        NotInitializedError: If the repository has no history
        RepositoryIOError: If the version cannot be persisted
    """
    last = _latest(repo)
    if path not in last.files:
        logger.debug("File not tracked, nothing to detach: %s", path)
        return None

    if message is None:
        message = _default_message(DEFAULT_DETACH_MESSAGE, path)
    return _create_version(repo, last, message, last.files - {path})


def commit_file(repo: Repository, path: str, message: Optional[str] = None) -> Optional[Version]:
    """Record the current contents of a tracked file as a new version.

    The tracked file set is unchanged; persisting the new version copies the
    current contents of every tracked file.

    Returns:
        The new version, or None if the file is not tracked

    Raises:
        WorkingFileNotFoundError: If the file does not exist
        NotInitializedError: If the repository has no history
        RepositoryIOError: If the version cannot be persisted
    """
    if not repo.workspace.exists(path):
        raise WorkingFileNotFoundError(f"File not found: {path}")

    last = _latest(repo)
    if path not in last.files:
        logger.debug("File not tracked, nothing to commit: %s", path)
        return None

    if message is None:
        message = _default_message(DEFAULT_COMMIT_MESSAGE, path)
    return _create_version(repo, last, message, last.files)


def checkout(repo: Repository, number: int) -> None:
    """Restore the files of a version into the working directory.

    Raises:
        InvalidVersionError: If the version is not in the history
        VersionDirectoryMissingError: If its storage directory is gone
        RepositoryIOError: If files cannot be copied
    """
    if not repo.version_exists(number):
        raise InvalidVersionError(f"Invalid version number: {number}")
    repo.restore_files(number)
    logger.debug("Restored files of version %d", number)


def history(repo: Repository, last: Optional[int] = None) -> List[Version]:
    """List versions, newest first.

    Args:
        repo: Loaded repository
        last: Maximum number of versions to list. None, negative values and
            values larger than the history list everything.
    """
    versions = list(reversed(repo.versions))
    if last is None or last < 0 or last > len(versions):
        return versions
    return versions[:last]
