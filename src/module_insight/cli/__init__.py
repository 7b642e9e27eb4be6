"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="module-insight",
    help="Module Insight - Test Module Resolution and Dependency Checks",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .modules import modules as _modules  # noqa: F401, E402
from .check import check_deps as _check_deps  # noqa: F401, E402


def main() -> None:
    app()
