"""Module listing command."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import ModuleInsightError
from ..logging_config import setup_logging
from . import app
from ._common import build_resolver, console


@app.command()
def modules(
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
    enabled_modules: Optional[Path] = typer.Option(
        None,
        "--enabled-modules",
        "-e",
        help="File listing enabled modules (JSON array or one name per line)",
        exists=True,
        dir_okay=False,
    ),
    whitelist: Optional[str] = typer.Option(
        None, "--whitelist", help="Comma-separated modules to enable in addition"
    ),
    custom_paths: Optional[str] = typer.Option(
        None, "--custom-paths", help="Comma-separated absolute module paths to include"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Include every discovered module, ignoring the enabled list"
    ),
    fmt: str = typer.Option("rich", "--format", help="Output format: rich or json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every included module"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    List resolved test modules and their paths.

    [bold cyan]Examples:[/bold cyan]

      module-insight modules --code-root /var/www/magento --force

      module-insight modules -e enabled.json --format json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        resolver = build_resolver(
            code_root=code_root,
            config=config,
            enabled_modules=enabled_modules,
            whitelist=whitelist,
            custom_paths=custom_paths,
            force=force,
            verbose=verbose,
        )
        descriptors = resolver.get_module_descriptors()
    except ModuleInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if fmt == "json":
        payload = {
            name: {
                "paths": [str(p) for p in descriptor.paths],
                "package": descriptor.composer_package_name,
            }
            for name, descriptor in sorted(descriptors.items())
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"{len(descriptors)} modules", show_lines=False)
    table.add_column("Module", style="bold cyan")
    table.add_column("Package")
    table.add_column("Path")
    for name, descriptor in sorted(descriptors.items()):
        table.add_row(
            name,
            descriptor.composer_package_name or "-",
            "\n".join(str(p) for p in descriptor.paths),
        )
    console.print(table)
