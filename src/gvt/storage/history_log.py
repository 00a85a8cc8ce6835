"""History log and manifest formats.

The history log (`.gvt/history.txt`) holds one line per version:

    <number>|<message>

Newlines inside the message are written as the two characters backslash and
`n`, so every record stays on a single line.

A manifest (`.gvt/version<N>/file_list.txt`) lists the tracked paths of one
version, one path per line.
"""

from typing import Iterable, Optional, Set, Tuple

from gvt.constants import ESCAPED_NEWLINE, HISTORY_SEPARATOR


class HistoryFormatError(Exception):
    """Raised when a history log line has a malformed or negative version number."""


def escape_message(message: str) -> str:
    """Escape embedded newlines so the message fits on one log line."""
    return message.replace("\n", ESCAPED_NEWLINE)


def unescape_message(message: str) -> str:
    """Reverse escape_message()."""
    return message.replace(ESCAPED_NEWLINE, "\n")


def format_entry(number: int, message: str) -> str:
    """Format a history log record, including the trailing newline."""
    return f"{number}{HISTORY_SEPARATOR}{escape_message(message)}\n"


def parse_entry(line: str) -> Optional[Tuple[int, str]]:
    """Parse a history log line into (number, message).

    Args:
        line: One line of the log, with or without its trailing newline

    Returns:
        (number, message) with newlines restored, or None if the line has no
        separator

    Raises:
        HistoryFormatError: If the number part is not a non-negative integer
    """
    if line.endswith("\n"):
        line = line[:-1]
    number_part, sep, message_part = line.partition(HISTORY_SEPARATOR)
    if not sep:
        return None

    try:
        number = int(number_part)
    except ValueError as e:
        raise HistoryFormatError(
            f"Invalid version number in history log: {number_part!r}"
        ) from e
    if number < 0:
        raise HistoryFormatError(
            f"Negative version number in history log: {number}"
        )

    return number, unescape_message(message_part)


def format_manifest(files: Iterable[str]) -> str:
    """Format a manifest, one path per line, sorted."""
    return "".join(f"{path}\n" for path in sorted(files))


def parse_manifest(text: str) -> Set[str]:
    """Parse a manifest into a set of paths, ignoring blank lines."""
    return {line for line in text.splitlines() if line.strip()}
