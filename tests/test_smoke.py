"""Basic smoke tests to verify project setup."""

from gvt import __version__


def test_version() -> None:
    """Test that version is correctly defined."""
    assert __version__ == "0.1.0"


def test_version_defined_once() -> None:
    """Test that the package version is not duplicated in constants."""
    from gvt import constants

    assert not hasattr(constants, "VERSION")


def test_import_storage() -> None:
    """Test that storage module can be imported."""
    from gvt import storage  # noqa: F401


def test_import_core() -> None:
    """Test that core module can be imported."""
    from gvt import core  # noqa: F401


def test_import_cli() -> None:
    """Test that cli module can be imported."""
    from gvt.cli import main  # noqa: F401


def test_workspace_root_fixture(workspace_root) -> None:
    """Test that workspace_root fixture creates sample files."""
    assert (workspace_root / "a.txt").exists()
    assert (workspace_root / "docs" / "notes.md").exists()
    assert (workspace_root / "a.txt").read_text() == "alpha v1\n"
