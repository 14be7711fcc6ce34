"""Command line interface.

`sync` is the default workflow: read `.env`, download every wanted locale
and write `<locale>.lproj/Localizable.strings`. The exit status is non-zero
only when a step before the per-locale loop fails.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from cli.ui_components import (
    RichSyncObserver,
    build_summary_table,
    print_banner,
    print_missing_env_help,
)
from core.config import AppSettings, write_example_env
from core.services.sync_pipeline import run_sync

app = typer.Typer(
    no_args_is_help=False,
    invoke_without_command=True,
    help="Download Traduora translations into .lproj folders.",
)

_console = Console()


def _resolve_env_file(env_file: Path | None, settings: AppSettings) -> Path:
    return env_file if env_file is not None else settings.env_file


@app.callback()
def main(ctx: typer.Context) -> None:
    """Run `sync` when no subcommand is given."""

    if ctx.invoked_subcommand is None:
        sync(env_file=None, quiet=False, summary=True)


@app.command()
def sync(
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        "-e",
        help="Path to the configuration file (default: ./.env).",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print warnings and errors."),
    summary: bool = typer.Option(True, "--summary/--no-summary", help="Print a per-locale table."),
) -> None:
    """Download the configured locales from Traduora."""

    settings = AppSettings()
    env_path = _resolve_env_file(env_file, settings)

    if not env_path.is_file():
        print_missing_env_help(_console, env_path)
        raise typer.Exit(code=1)

    if not quiet:
        print_banner(_console)

    result = run_sync(
        env_path,
        observer=RichSyncObserver(_console, quiet=quiet),
        settings=settings,
    )

    if summary and not quiet and result.selected_locales:
        _console.print(build_summary_table(result))

    if result.exit_code != 0:
        raise typer.Exit(code=result.exit_code)


@app.command()
def init(
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        "-e",
        help="Where to write the template (default: ./.env).",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
) -> None:
    """Write an example configuration file to fill in."""

    env_path = _resolve_env_file(env_file, AppSettings())
    try:
        write_example_env(env_path, overwrite=force)
    except FileExistsError:
        _console.print(f"[yellow]{env_path} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(code=1) from None
    _console.print(f"[green]Wrote example config to:[/green] {env_path}")


def run() -> None:
    app()
