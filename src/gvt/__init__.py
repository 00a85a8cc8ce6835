"""GVT - minimal local version control.

GVT records numbered snapshots of a user-selected set of files, each with a
message, and can restore any earlier snapshot into the working directory.
"""

__version__ = "0.1.0"
__author__ = "GVT Contributors"

__all__ = ["__version__", "__author__"]
