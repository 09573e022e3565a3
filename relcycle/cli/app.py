from __future__ import annotations

import typer

from relcycle import __version__
from relcycle.cli.commands.release_cmd import release
from relcycle.cli.commands.status import status


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(release)
app.command()(status)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Release a -SNAPSHOT project and open the next development cycle."""


def main() -> None:
    app()
