"""Dependency check command."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import ModuleInsightError
from ..logging_config import setup_logging
from ..validation import run_dependency_check
from . import app
from ._common import build_resolver, console


@app.command("check-deps")
def check_deps(
    code_root: Optional[Path] = typer.Option(
        None,
        "--code-root",
        "-r",
        help="Application code root (overrides MAGENTO_BP)",
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Directory for the error report", file_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Check that test references respect declared module dependencies.

    Exits with status 1 when any file references an entity owned by a
    module outside its composer dependencies.

    [bold cyan]Examples:[/bold cyan]

      module-insight check-deps --code-root /var/www/magento

      module-insight check-deps -o build/reports
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        resolver = build_resolver(code_root=code_root, config=config, verbose=verbose)
        result = run_dependency_check(resolver, output_dir=output_dir)
    except ModuleInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if result.passed:
        console.print(f"[green]{result.summary}[/green]")
        return

    if verbose:
        for blocks in result.errors.values():
            for block in blocks:
                console.print(block, markup=False, highlight=False)
            console.print()
    console.print(f"[red]{result.summary}[/red]")
    raise typer.Exit(1)
