from pathlib import Path
from typing import List, Optional

import typer

from zephyr_codemod.catalog import BUNDLER_CONFIGS
from zephyr_codemod.cli.codemod import render_catalog, render_summary
from zephyr_codemod.cli.config import CLIConfig
from zephyr_codemod.cli.output import get_console, print_error, print_json
from zephyr_codemod.exceptions import ConfigError
from zephyr_codemod.logging_config import logger, setup_logging
from zephyr_codemod.mutation import CodemodFacade
from zephyr_codemod.packages import detect_package_manager
from zephyr_codemod.schemas import CodemodOptions

app = typer.Typer(add_completion=False)
console = get_console()


def _split_bundlers(values: Optional[List[str]]) -> Optional[List[str]]:
    """Accept both `-b webpack -b vite` and `-b webpack,vite`."""
    if not values:
        return None
    names = [name.strip() for value in values for name in value.split(",")]
    return [name for name in names if name] or None


def _catalog_as_dict() -> dict:
    return {
        name: {
            "plugin": config.plugin,
            "import_name": config.import_name,
            "files": list(config.files),
        }
        for name, config in BUNDLER_CONFIGS.items()
    }


@app.command()
def main(
    directory: Path = typer.Argument(
        Path("."),
        help="Project directory to search for bundler configs.",
        file_okay=False,
        dir_okay=True,
    ),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Show what would change without writing files."),
    bundlers: Optional[List[str]] = typer.Option(
        None,
        "--bundlers",
        "-b",
        help="Only process these bundlers (repeat or comma-separate).",
    ),
    install: bool = typer.Option(False, "--install", "-i", help="Install missing Zephyr plugins."),
    json_output: bool = typer.Option(False, "--json", help="Print the run summary as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging; show diffs in dry runs."),
    list_bundlers: bool = typer.Option(False, "--list-bundlers", help="List supported bundlers and exit."),
):
    """
    Add the Zephyr plugin to every bundler configuration under DIRECTORY.
    """
    CLIConfig.reset()
    CLIConfig.set_json_mode(json_output)
    CLIConfig.set_verbose(verbose)

    # stdout carries only the JSON document in JSON mode
    if json_output:
        setup_logging(suppress_console=True, force=True)
    elif verbose:
        setup_logging(level="DEBUG", force=True)

    if list_bundlers:
        if json_output:
            print_json(_catalog_as_dict())
        else:
            render_catalog(BUNDLER_CONFIGS)
        return

    if not directory.is_dir():
        print_error(f"Directory not found: {directory}")
        raise typer.Exit(code=2)

    options = CodemodOptions(
        dry_run=dry_run,
        bundlers=_split_bundlers(bundlers),
        install_packages=install,
    )

    console.print(f"[bold]Zephyr codemod[/bold] in {directory.resolve()}")
    if dry_run:
        console.print("[dim]Dry run: no files will be written.[/dim]")

    facade = CodemodFacade(BUNDLER_CONFIGS, options)
    try:
        summary = facade.run(directory)
    except ConfigError as e:
        logger.debug(f"Rejected options: {e}")
        print_error(str(e))
        raise typer.Exit(code=2)

    if json_output:
        print_json(summary.to_dict())
    elif not summary.results:
        console.print("[yellow]No bundler configuration files found.[/yellow]")
        console.print(f"Supported bundlers: {', '.join(BUNDLER_CONFIGS.keys())}")
    else:
        render_summary(summary, detect_package_manager(directory))

    if summary.errors:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
