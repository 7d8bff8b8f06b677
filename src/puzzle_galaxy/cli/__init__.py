"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="puzzle-galaxy",
    help="Puzzle Galaxy - similarity graph of solved puzzles",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"puzzle-galaxy {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Explore the puzzle similarity galaxy."""


# Import subcommands to register them
from .summary import summary as _summary  # noqa: F401, E402
from .hulls import hulls as _hulls  # noqa: F401, E402
from .watch import watch as _watch  # noqa: F401, E402


def main() -> None:
    app()
