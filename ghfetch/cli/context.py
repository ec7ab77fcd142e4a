from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from ghfetch.core.config import Config, default_config_path, load_config, load_optional_config
from ghfetch.core.errors import ErrorCode
from ghfetch.core.result import Err
from ghfetch.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    """Load config and create the console.

    An explicitly given config file must exist; the default location is
    optional.
    """
    if config_path is not None:
        result = load_config(config_path.expanduser())
    else:
        result = load_optional_config(default_config_path())

    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(config=result.value, console=RichConsole())
