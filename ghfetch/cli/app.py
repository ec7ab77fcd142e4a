from __future__ import annotations

import typer

from ghfetch.cli.commands.fetch import fetch

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)

app.command()(fetch)


def main() -> None:
    app()
