"""Main CLI entry point for GVT."""

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from gvt.constants import (
    EXIT_ADD_FAILED,
    EXIT_ADD_NO_FILE,
    EXIT_ADD_NOT_FOUND,
    EXIT_ALREADY_INITIALIZED,
    EXIT_COMMIT_FAILED,
    EXIT_COMMIT_NO_FILE,
    EXIT_COMMIT_NOT_FOUND,
    EXIT_DETACH_FAILED,
    EXIT_DETACH_NO_FILE,
    EXIT_INVALID_VERSION,
    EXIT_NO_COMMAND,
    EXIT_NOT_INITIALIZED,
    EXIT_SYSTEM_ERROR,
    WORKDIR_ENV,
)
from gvt.core import InvalidVersionError, WorkingFileNotFoundError, operations
from gvt.storage import FileSystemWorkspace, Repository, RepositoryError

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)
app = typer.Typer(
    name="gvt",
    help="Minimal local version control for individual files",
    add_completion=False,
)


def _printable(text: str) -> str:
    # Undecodable filename bytes arrive as lone surrogates
    return text.encode("utf-8", errors="replace").decode("utf-8")


def _echo(message: str) -> None:
    console.print(escape(_printable(message)))


def _exit(code: int, message: str) -> NoReturn:
    """Print a message and leave with the given exit code."""
    if message:
        _echo(message)
    raise typer.Exit(code)


def _report_error(code: int, message: str, error: Exception) -> NoReturn:
    """Print a failure summary, send the details to stderr and exit."""
    _echo(message)
    err_console.print(f"[bold red]Error:[/bold red] {escape(_printable(str(error)))}")
    logger.debug("Operation failed", exc_info=error)
    raise typer.Exit(code)


def _require_repo(ctx: typer.Context) -> Repository:
    repo: Repository = ctx.obj
    if not repo.is_initialized():
        _exit(
            EXIT_NOT_INITIALIZED,
            "Current directory is not initialized. Please use init command to initialize.",
        )
    return repo


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _show_version(value: bool) -> None:
    if value:
        from gvt import __version__
        typer.echo(f"GVT version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Option(
        None,
        "--directory",
        "-C",
        envvar=WORKDIR_ENV,
        help="Working directory holding the repository (default: current directory)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging on stderr",
    ),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show GVT version and exit",
    ),
) -> None:
    """Load the repository before running a command."""
    _configure_logging(verbose)

    workspace_root = directory if directory is not None else Path.cwd()
    logger.debug("Using workspace %s", workspace_root)

    repo = Repository(FileSystemWorkspace(workspace_root))
    try:
        repo.load_history()
    except Exception as e:
        _report_error(EXIT_SYSTEM_ERROR, "Cannot load repository.", e)
    ctx.obj = repo

    if ctx.invoked_subcommand is None:
        _exit(EXIT_NO_COMMAND, "Please specify command.")


@app.command()
def init(ctx: typer.Context) -> None:
    """Initialize a GVT repository in the working directory."""
    repo: Repository = ctx.obj

    if repo.is_initialized():
        _exit(EXIT_ALREADY_INITIALIZED, "Current directory is already initialized.")

    try:
        repo.initialize()
    except RepositoryError as e:
        _report_error(EXIT_SYSTEM_ERROR, "Underlying system problem. See ERR for details.", e)

    console.print("Current directory initialized successfully.")


@app.command()
def add(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="File to start tracking"),
    message: Optional[str] = typer.Option(
        None,
        "--message",
        "-m",
        help="Version message",
    ),
) -> None:
    """Start tracking a file."""
    repo = _require_repo(ctx)
    if file is None:
        _exit(EXIT_ADD_NO_FILE, "Please specify file to add.")

    try:
        version = operations.track_file(repo, file, message)
    except WorkingFileNotFoundError:
        _exit(EXIT_ADD_NOT_FOUND, f"File not found. File: {file}")
    except RepositoryError as e:
        _report_error(
            EXIT_ADD_FAILED,
            f"File cannot be added. See ERR for details. File: {file}",
            e,
        )

    if version is None:
        _echo(f"File already added. File: {file}")
        return
    _echo(f"File added successfully. File: {file}")


@app.command()
def detach(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="File to stop tracking"),
    message: Optional[str] = typer.Option(
        None,
        "--message",
        "-m",
        help="Version message",
    ),
) -> None:
    """Stop tracking a file. The file itself is kept."""
    repo = _require_repo(ctx)
    if file is None:
        _exit(EXIT_DETACH_NO_FILE, "Please specify file to detach.")

    try:
        version = operations.detach_file(repo, file, message)
    except RepositoryError as e:
        _report_error(
            EXIT_DETACH_FAILED,
            f"File cannot be detached, see ERR for details. File: {file}",
            e,
        )

    if version is None:
        _echo(f"File is not added to gvt. File: {file}")
        return
    _echo(f"File detached successfully. File: {file}")


@app.command()
def commit(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Tracked file to commit"),
    message: Optional[str] = typer.Option(
        None,
        "--message",
        "-m",
        help="Version message",
    ),
) -> None:
    """Record the current contents of a tracked file."""
    repo = _require_repo(ctx)
    if file is None:
        _exit(EXIT_COMMIT_NO_FILE, "Please specify file to commit.")

    try:
        version = operations.commit_file(repo, file, message)
    except WorkingFileNotFoundError:
        _exit(EXIT_COMMIT_NOT_FOUND, f"File not found. File: {file}")
    except RepositoryError as e:
        _report_error(
            EXIT_COMMIT_FAILED,
            f"File cannot be committed, see ERR for details. File: {file}",
            e,
        )

    if version is None:
        _echo(f"File is not added to gvt. File: {file}")
        return
    _echo(f"File committed successfully. File: {file}")


@app.command()
def checkout(
    ctx: typer.Context,
    version: Optional[str] = typer.Argument(None, help="Version number to restore"),
) -> None:
    """Restore tracked files from a version into the working directory."""
    repo = _require_repo(ctx)
    if version is None:
        _exit(EXIT_INVALID_VERSION, "Please specify version number.")

    try:
        number = int(version)
    except ValueError:
        _exit(EXIT_INVALID_VERSION, f"Invalid version number: {version}")

    try:
        operations.checkout(repo, number)
    except InvalidVersionError:
        _exit(EXIT_INVALID_VERSION, f"Invalid version number: {number}")
    except RepositoryError as e:
        _report_error(EXIT_SYSTEM_ERROR, "Cannot restore files. See ERR for details.", e)

    console.print(f"Checkout successful for version: {number}")


@app.command()
def history(
    ctx: typer.Context,
    last: Optional[int] = typer.Option(
        None,
        "--last",
        "-n",
        help="Show only the most recent N versions",
    ),
) -> None:
    """Show version history, newest first."""
    repo = _require_repo(ctx)

    for v in operations.history(repo, last):
        _echo(f"{v.number}: {v.summary}")


@app.command()
def version(
    ctx: typer.Context,
    number: Optional[str] = typer.Argument(None, help="Version number (default: latest)"),
) -> None:
    """Show the number and full message of a version."""
    repo = _require_repo(ctx)

    if number is None:
        latest = repo.latest_version()
        if latest is None:
            _exit(EXIT_INVALID_VERSION, "No versions recorded.")
        found = latest
    else:
        try:
            parsed = int(number)
        except ValueError:
            _exit(EXIT_INVALID_VERSION, f"Invalid version number: {number}.")
        found = repo.get_version(parsed)
        if found is None:
            _exit(EXIT_INVALID_VERSION, f"Invalid version number: {parsed}.")

    console.print(f"Version: {found.number}")
    _echo(found.message)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
