"""CLI interface for scrapyard."""

import logging

import typer
from rich.console import Console

from scrapyard.archivers.tar_archiver import TarArchiver
from scrapyard.consts import (
    COMMAND_MIN_PATHS,
    DEFAULT_YARD,
    EXIT_ARCHIVER_FAILED,
    EXIT_MISS,
    EXIT_OK,
    EXIT_USAGE,
    EXIT_YARD_ERROR,
    KEYED_COMMANDS,
    YARD_ENV_VAR,
)
from scrapyard.exceptions import ScrapyardError, UsageError
from scrapyard.models.model_yard import OperationResult, Outcome, YardContext
from scrapyard.storage.yard import Scrapyard

app = typer.Typer(
    name="scrapyard",
    help="Scrapyard - store and restore directory trees in a content-keyed archive cache",
    no_args_is_help=True,
)

console = Console()

EXIT_CODES: dict[Outcome, int] = {
    Outcome.RESTORED: EXIT_OK,
    Outcome.MISS: EXIT_MISS,
    Outcome.EXTRACT_FAILED: EXIT_ARCHIVER_FAILED,
    Outcome.STORED: EXIT_OK,
    Outcome.CREATE_FAILED: EXIT_ARCHIVER_FAILED,
    Outcome.JUNKED: EXIT_OK,
    Outcome.CRUSHED: EXIT_OK,
}

KEYS_OPTION = typer.Option(
    None,
    "--keys",
    "-k",
    help="Comma-separated keys in order of preference, e.g. 'app-#(poetry.lock),app-'",
)
YARD_OPTION = typer.Option(
    str(DEFAULT_YARD),
    "--yard",
    "-y",
    envvar=YARD_ENV_VAR,
    help="The directory the scrapyard is stored in",
)
PATHS_OPTION = typer.Option(
    None,
    "--paths",
    "-p",
    help="Comma-separated paths to store in (or expect from) the scrapyard",
)
EXTRA_PATHS_ARGUMENT = typer.Argument(None, help="Additional paths")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logging")


def _split_csv(value: str | None) -> list[str]:
    """Parse a comma-separated option into a list, dropping empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def check_arguments(command: str, keys: list[str], paths: list[str]) -> None:
    """Enforce the key/path requirements of a command.

    Raises:
        UsageError: If a required key or path is missing.
    """
    if len(paths) < COMMAND_MIN_PATHS[command]:
        raise UsageError(f"{command} requires paths")
    if command in KEYED_COMMANDS and not keys:
        raise UsageError(f"Command {command} requires at least one key argument")


def _configure_logging(context: YardContext) -> None:
    level = logging.DEBUG if context.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    context.log.setLevel(level)


def _report(command: str, result: OperationResult) -> None:
    """Print a one-line summary of an operation result."""
    if result.outcome == Outcome.RESTORED:
        console.print(f"[green]Restored scrap from {result.archive}[/green]")
    elif result.outcome == Outcome.MISS:
        console.print("[yellow]No scrap found for any key[/yellow]")
    elif result.outcome in (Outcome.EXTRACT_FAILED, Outcome.CREATE_FAILED):
        console.print(f"[red]Error:[/red] {command} failed: {result.error}")
    elif result.outcome == Outcome.STORED:
        console.print(f"[green]Stored scrap in {result.archive}[/green]")
    elif result.outcome == Outcome.JUNKED:
        console.print(f"Junked {len(result.removed)} archive(s)")
    elif result.outcome == Outcome.CRUSHED:
        console.print(f"Crushed {len(result.removed)} entries, kept {len(result.kept)}")


def _execute(
    command: str,
    keys: str | None,
    yard: str,
    paths: str | None,
    extra_paths: list[str] | None,
    verbose: bool,
) -> None:
    """Run one yard operation and exit with its status code."""
    context = YardContext(yard=yard, verbose=verbose)
    _configure_logging(context)

    key_list = _split_csv(keys)
    path_list = _split_csv(paths) + list(extra_paths or [])

    try:
        check_arguments(command, key_list, path_list)
    except UsageError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"Run 'scrapyard {command} --help' for usage.")
        raise typer.Exit(EXIT_USAGE)

    archiver = TarArchiver()
    if command in ("search", "dump") and not archiver.is_tar_installed():
        console.print("[red]Error: tar not installed[/red]")
        raise typer.Exit(EXIT_ARCHIVER_FAILED)

    store = Scrapyard(context, archiver=archiver)

    try:
        result = store.run(command, key_list, path_list)
    except ScrapyardError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_YARD_ERROR)

    _report(command, result)
    raise typer.Exit(EXIT_CODES[result.outcome])


@app.command()
def search(
    keys: str = KEYS_OPTION,
    yard: str = YARD_OPTION,
    paths: str = PATHS_OPTION,
    extra_paths: list[str] = EXTRA_PATHS_ARGUMENT,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Restore the newest archive of the first key that has one."""
    _execute("search", keys, yard, paths, extra_paths, verbose)


@app.command()
def dump(
    keys: str = KEYS_OPTION,
    yard: str = YARD_OPTION,
    paths: str = PATHS_OPTION,
    extra_paths: list[str] = EXTRA_PATHS_ARGUMENT,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Archive paths into the scrapyard under the first key."""
    _execute("dump", keys, yard, paths, extra_paths, verbose)


@app.command()
def junk(
    keys: str = KEYS_OPTION,
    yard: str = YARD_OPTION,
    paths: str = PATHS_OPTION,
    extra_paths: list[str] = EXTRA_PATHS_ARGUMENT,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Delete the archives stored under exactly these keys."""
    _execute("junk", keys, yard, paths, extra_paths, verbose)


@app.command()
def crush(
    keys: str = KEYS_OPTION,
    yard: str = YARD_OPTION,
    paths: str = PATHS_OPTION,
    extra_paths: list[str] = EXTRA_PATHS_ARGUMENT,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Delete every archive in the scrapyard older than 20 days."""
    _execute("crush", keys, yard, paths, extra_paths, verbose)


if __name__ == "__main__":
    app()
