"""Constants used throughout GVT."""

# Directory names
GVT_DIR = ".gvt"
VERSION_DIR_PREFIX = "version"

# File names
HISTORY_FILE = "history.txt"
MANIFEST_FILE = "file_list.txt"

# History log format
HISTORY_SEPARATOR = "|"
ESCAPED_NEWLINE = "\\n"

# Messages
INIT_MESSAGE = "GVT initialized."
DEFAULT_ADD_MESSAGE = "File added successfully."
DEFAULT_DETACH_MESSAGE = "File detached successfully."
DEFAULT_COMMIT_MESSAGE = "File committed successfully."

# Environment variables
WORKDIR_ENV = "GVT_WORKDIR"

# Exit codes
EXIT_SUCCESS = 0
EXIT_NO_COMMAND = 1
EXIT_NOT_INITIALIZED = -2
EXIT_SYSTEM_ERROR = -3
EXIT_ALREADY_INITIALIZED = 10
EXIT_ADD_NO_FILE = 20
EXIT_ADD_NOT_FOUND = 21
EXIT_ADD_FAILED = 22
EXIT_DETACH_NO_FILE = 30
EXIT_DETACH_FAILED = 31
EXIT_COMMIT_NO_FILE = 50
EXIT_COMMIT_NOT_FOUND = 51
EXIT_COMMIT_FAILED = 52
EXIT_INVALID_VERSION = 60
