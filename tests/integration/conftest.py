"""Fixtures for integration tests."""

from pathlib import Path
from typing import Callable, List

import pytest
from typer.testing import CliRunner, Result

from gvt.cli.main import app


@pytest.fixture
def initialized_repo(tmp_path: Path) -> Path:
    """Create a temporary directory with an initialized GVT repository.

    Returns:
        Path: Path to the workspace root
    """
    workspace = tmp_path / "test_workspace"
    workspace.mkdir()

    result = CliRunner().invoke(app, ["-C", str(workspace), "init"])

    if result.exit_code != 0:
        raise RuntimeError(f"Failed to initialize repo: {result.output}")

    return workspace


@pytest.fixture
def gvt(initialized_repo: Path) -> Callable[..., Result]:
    """Run gvt commands against the initialized repository."""
    runner = CliRunner()

    def invoke(*args: str) -> Result:
        argv: List[str] = ["-C", str(initialized_repo), *args]
        return runner.invoke(app, argv)

    return invoke
