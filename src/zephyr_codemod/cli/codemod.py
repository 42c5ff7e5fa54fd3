"""
Human-readable rendering of codemod runs and the bundler catalog.
"""

from typing import Mapping

from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from zephyr_codemod.catalog import BundlerConfig
from zephyr_codemod.packages import install_command
from zephyr_codemod.schemas import CodemodSummary, FileResult, TransformOutcome

from .config import CLIConfig
from .output import get_console

console = get_console()

OUTCOME_STYLES = {
    TransformOutcome.TRANSFORMED: ("green", "✔"),
    TransformOutcome.SKIPPED_ALREADY_PRESENT: ("dim", "-"),
    TransformOutcome.SKIPPED_UNMATCHED_BUNDLER: ("dim", "-"),
    TransformOutcome.PARSE_WARNING: ("yellow", "!"),
    TransformOutcome.ERROR: ("red", "✘"),
}


def render_result(result: FileResult) -> None:
    color, mark = OUTCOME_STYLES[result.outcome]
    line = f"[{color}]{mark}[/{color}] {escape(result.file_path)} [dim]({result.bundler_name})[/dim]"
    if result.message:
        line += f" {escape(result.message)}"
    console.print(line)
    if result.diff and CLIConfig.is_verbose():
        console.print(Syntax(result.diff, "diff", theme="ansi_dark"))


def render_summary(summary: CodemodSummary, manager: str = "npm") -> None:
    """Per-file lines, totals, and what is left for the user to do."""
    for result in summary.results:
        render_result(result)

    console.print()
    console.print("[bold]Summary[/bold]")
    label = "Would transform" if summary.dry_run else "Transformed"
    console.print(f"  {label}: [green]{summary.processed}[/green]")
    console.print(f"  Skipped: {summary.skipped}")
    if summary.warnings:
        console.print(f"  Parse warnings: [yellow]{summary.warnings}[/yellow]")
    if summary.errors:
        console.print(f"  Errors: [red]{summary.errors}[/red]")

    if summary.installed_plugins:
        console.print(f"\n[green]Installed:[/green] {', '.join(summary.installed_plugins)}")

    remaining = [p for p in summary.missing_plugins if p not in summary.installed_plugins]
    if remaining:
        console.print("\n[yellow]Install the Zephyr plugins to finish the setup:[/yellow]")
        console.print(f"  {' '.join(install_command(' '.join(remaining), manager))}")

    if summary.dry_run and summary.processed:
        console.print("\n[dim]Dry run: no files were changed. Run without --dry-run to apply.[/dim]")


def render_catalog(catalog: Mapping[str, BundlerConfig]) -> None:
    table = Table(title="Supported bundlers")
    table.add_column("Bundler", style="cyan")
    table.add_column("Plugin")
    table.add_column("Config files", style="dim")
    for name, config in catalog.items():
        table.add_row(name, config.plugin, ", ".join(config.files))
    console.print(table)
