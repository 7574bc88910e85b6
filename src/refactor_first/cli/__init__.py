"""CLI entry point: registers the command."""

import typer

app = typer.Typer(
    name="refactor-first",
    help="Refactor First - rank God classes by refactoring priority",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command module to register it
from .rank import rank_command as _rank_command  # noqa: F401, E402


def main() -> None:
    app()
