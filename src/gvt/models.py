"""Data model for GVT versions."""

from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class Version:
    """An immutable, numbered snapshot of the tracked file set.

    The file set is always stored as a frozenset copy of whatever iterable
    was passed in, so later changes to the caller's set never leak into a
    version.

    Attributes:
        number: Version number; 0 is the initialization snapshot
        message: Free-form message, may span several lines
        files: Paths tracked as of this version

    Example:
        >>> previous = {"a.txt"}
        >>> v = Version(1, "Track a.txt", previous)
        >>> previous.add("b.txt")
        >>> sorted(v.files)
        ['a.txt']
    """

    number: int
    message: str
    files: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        if self.number < 0:
            raise ValueError(f"Version number must be non-negative, got {self.number}")
        object.__setattr__(self, "files", frozenset(self.files))

    @property
    def summary(self) -> str:
        """First line of the message, used in one-line listings."""
        return self.message.split("\n", 1)[0]
