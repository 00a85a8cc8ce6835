"""Version repository engine.

The repository owns the ordered list of versions and the on-disk layout:

    .gvt/
    ├── history.txt             # <number>|<escaped message>, one per line
    ├── version0/
    │   └── file_list.txt       # manifest: tracked paths, one per line
    └── version1/
        ├── file_list.txt
        └── notes.txt           # copy of a tracked file, by base filename

The history log is the source of truth for which versions exist. A version
directory is written completely (copies, then manifest) before its log line
is appended, so a version is committed exactly when its log line is.

The engine never logs or prints. Failures are raised as RepositoryError
subclasses and callers decide how to present them.
"""

from pathlib import PurePath
from typing import List, Optional, Set, Tuple

from gvt.constants import (
    GVT_DIR,
    HISTORY_FILE,
    INIT_MESSAGE,
    MANIFEST_FILE,
    VERSION_DIR_PREFIX,
)
from gvt.models import Version
from gvt.storage.history_log import format_entry, format_manifest, parse_entry, parse_manifest
from gvt.storage.workspace import Workspace


class RepositoryError(Exception):
    """Base exception for repository errors."""


class AlreadyInitializedError(RepositoryError):
    """Raised when initializing a directory that already holds a repository."""


class NotInitializedError(RepositoryError):
    """Raised when an operation needs a repository that does not exist yet."""


class VersionDirectoryMissingError(RepositoryError):
    """Raised when a version's storage directory is absent on disk."""


class RepositoryIOError(RepositoryError):
    """Raised when an underlying filesystem operation fails.

    The original OSError or UnicodeError is available as __cause__.
    """


class Repository:
    """Ordered version history backed by a workspace.

    Attributes:
        workspace: Workspace holding both the tracked files and `.gvt/`

    Example:
        >>> repo = Repository(FileSystemWorkspace(Path.cwd()))
        >>> repo.load_history()
        >>> if not repo.is_initialized():
        ...     repo.initialize()
        >>> repo.latest_version().number
        0
    """

    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace
        self._versions: List[Version] = []

    @property
    def versions(self) -> Tuple[Version, ...]:
        """Loaded versions in ascending order."""
        return tuple(self._versions)

    @property
    def history_path(self) -> str:
        return f"{GVT_DIR}/{HISTORY_FILE}"

    def version_dir(self, number: int) -> str:
        """Get the workspace path of a version's storage directory."""
        return f"{GVT_DIR}/{VERSION_DIR_PREFIX}{number}"

    def manifest_path(self, number: int) -> str:
        return f"{self.version_dir(number)}/{MANIFEST_FILE}"

    def is_initialized(self) -> bool:
        """Check whether the repository root directory exists."""
        return self.workspace.exists(GVT_DIR)

    def initialize(self) -> Version:
        """Create the repository and its initial, empty version 0.

        Returns:
            The new version 0

        Raises:
            AlreadyInitializedError: If the repository already exists
            RepositoryIOError: If the repository cannot be written
        """
        if self.is_initialized():
            raise AlreadyInitializedError(
                f"Repository already initialized ({GVT_DIR} exists)"
            )

        try:
            self.workspace.make_dir(GVT_DIR)
        except OSError as e:
            raise RepositoryIOError(f"Failed to create {GVT_DIR}: {e}") from e

        initial = Version(0, INIT_MESSAGE, frozenset())
        self.persist(initial)
        self.add_version(initial)
        return initial

    def load_history(self) -> None:
        """Load all versions recorded in the history log.

        Replaces the in-memory list. Does nothing if the repository or its
        history log does not exist. Log lines without a separator are skipped,
        and a version without a manifest gets an empty file set.

        Raises:
            RepositoryIOError: If the log or a manifest cannot be read
            HistoryFormatError: If a log line has a non-integer version number
        """
        self._versions = []

        if not self.is_initialized():
            return
        if not self.workspace.exists(self.history_path):
            return

        try:
            content = self.workspace.read_text(self.history_path)
        except (OSError, UnicodeError) as e:
            raise RepositoryIOError(f"Failed to read history log: {e}") from e

        for line in content.split("\n"):
            entry = parse_entry(line)
            if entry is None:
                continue
            number, message = entry
            self._versions.append(Version(number, message, self.read_file_list(number)))

    def read_file_list(self, number: int) -> Set[str]:
        """Read the manifest of a version.

        Returns:
            Tracked paths of the version, or an empty set if it has no manifest
        """
        path = self.manifest_path(number)
        if not self.workspace.exists(path):
            return set()

        try:
            return parse_manifest(self.workspace.read_text(path))
        except (OSError, UnicodeError) as e:
            raise RepositoryIOError(f"Failed to read manifest of version {number}: {e}") from e

    def latest_version(self) -> Optional[Version]:
        """Get the most recent version, or None if nothing is loaded."""
        if not self._versions:
            return None
        return self._versions[-1]

    def version_exists(self, number: int) -> bool:
        return any(v.number == number for v in self._versions)

    def get_version(self, number: int) -> Optional[Version]:
        """Find a loaded version by number."""
        for v in self._versions:
            if v.number == number:
                return v
        return None

    def add_version(self, version: Version) -> None:
        """Append a version to the in-memory history.

        Raises:
            ValueError: If the version does not directly follow the latest one
        """
        latest = self.latest_version()
        expected = 0 if latest is None else latest.number + 1
        if version.number != expected:
            raise ValueError(
                f"Expected version {expected}, got {version.number}"
            )
        self._versions.append(version)

    def persist(self, version: Version) -> None:
        """Write a version to disk.

        Copies the current contents of every tracked file that exists into the
        version directory, writes the manifest and appends the history log
        line. The log line is written last and in a single write. The
        in-memory history is left untouched.

        Raises:
            RepositoryIOError: If any filesystem operation fails
        """
        version_dir = self.version_dir(version.number)

        try:
            self.workspace.make_dir(version_dir)

            for path in version.files:
                if self.workspace.exists(path):
                    self.workspace.copy(path, f"{version_dir}/{PurePath(path).name}")

            self.workspace.write_text(
                self.manifest_path(version.number),
                format_manifest(version.files),
            )

            self.workspace.append_text(
                self.history_path,
                format_entry(version.number, version.message),
            )
        except (OSError, UnicodeError) as e:
            raise RepositoryIOError(
                f"Failed to persist version {version.number}: {e}"
            ) from e

    def restore_files(self, number: int) -> None:
        """Copy a version's stored files back into the working directory.

        Existing working files are overwritten. Manifest entries without a
        stored copy are skipped, and files not in the version are left alone.

        Raises:
            VersionDirectoryMissingError: If the version directory is absent
            RepositoryIOError: If any filesystem operation fails
        """
        version_dir = self.version_dir(number)
        if not self.workspace.is_dir(version_dir):
            raise VersionDirectoryMissingError(
                f"Storage directory for version {number} not found: {version_dir}"
            )

        files = self.read_file_list(number)
        try:
            for path in files:
                stored = f"{version_dir}/{PurePath(path).name}"
                if self.workspace.exists(stored):
                    self.workspace.copy(stored, path)
        except (OSError, UnicodeError) as e:
            raise RepositoryIOError(f"Failed to restore version {number}: {e}") from e
