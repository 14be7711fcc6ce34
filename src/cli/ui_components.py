"""Rich rendering for the CLI: banner, guidance, progress lines, summary."""

from __future__ import annotations

from pathlib import Path

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import EXAMPLE_ENV
from core.interfaces.events import SyncStage
from core.services.sync_pipeline import SyncResult

_STAGE_ICONS: dict[SyncStage, str] = {
    SyncStage.START: "🔄",
    SyncStage.CONFIG: "⚙️ ",
    SyncStage.AUTHENTICATE: "🔐",
    SyncStage.PROJECT: "📦",
    SyncStage.LIST_LOCALES: "📋",
    SyncStage.RECONCILE: "📥",
    SyncStage.NO_MATCH: "❌",
    SyncStage.LOCALE_START: "🌐",
    SyncStage.DIRECTORY: "📁",
    SyncStage.DOWNLOAD: "⬇️ ",
    SyncStage.SAVE: "💾",
    SyncStage.LOCALE_DONE: "✅",
    SyncStage.LOCALE_FAILED: "⚠️ ",
    SyncStage.DONE: "🎉",
    SyncStage.ERROR: "❌",
}

_STAGE_STYLES: dict[SyncStage, str] = {
    SyncStage.LOCALE_DONE: "green",
    SyncStage.NO_MATCH: "yellow",
    SyncStage.LOCALE_FAILED: "yellow",
    SyncStage.DONE: "bold green",
    SyncStage.ERROR: "bold red",
}

_QUIET_STAGES = frozenset({SyncStage.LOCALE_FAILED, SyncStage.ERROR})


def print_banner(console: Console) -> None:
    title = Text("traduora-sync", style="bold cyan")
    subtitle = Text("Traduora → Localizable.strings", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(0, 4)))


def print_missing_env_help(console: Console, env_path: Path) -> None:
    """Guidance shown when the env file does not exist."""

    console.print(
        f"[bold red]❌ {env_path} file not found.[/bold red] "
        "Please create it with your Traduora credentials."
    )
    console.print("Example:")
    console.print(Text(EXAMPLE_ENV.rstrip("\n"), style="dim"))
    console.print("Tip: `traduora-sync init` writes this template for you.", style="dim")


class RichSyncObserver:
    """Renders pipeline events as one console line each."""

    def __init__(self, console: Console, *, quiet: bool = False) -> None:
        self._console = console
        self._quiet = quiet

    def on_event(self, stage: SyncStage, locale: str | None, message: str) -> None:
        if self._quiet and stage not in _QUIET_STAGES:
            return
        icon = _STAGE_ICONS.get(stage, "•")
        indent = "   " if locale and stage is not SyncStage.LOCALE_START else ""
        self._console.print(
            f"{indent}{icon} {message}",
            style=_STAGE_STYLES.get(stage),
            markup=False,
            highlight=False,
        )


def build_summary_table(result: SyncResult) -> Table:
    """One row per selected locale with its outcome."""

    failures = {failure.locale: failure.message for failure in result.failures}
    table = Table(title="Localization sync")
    table.add_column("Locale", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")
    for locale in result.selected_locales:
        if locale in failures:
            table.add_row(locale, "[yellow]FAILED[/yellow]", failures[locale])
        else:
            table.add_row(locale, "[green]OK[/green]", "")
    return table
