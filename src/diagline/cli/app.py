# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared options."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..core.logging import configure_logging
from .commands import register_commands
from .shared import CLIState
from .typer_ext import create_typer

DEFAULT_ROOT = Path(".")

app = create_typer(help="Filter, order and render editor diagnostics.")


@app.callback()
def main(
    ctx: typer.Context,
    root: Annotated[Path, typer.Option("--root", "-r", help="Project root to search.")] = DEFAULT_ROOT,
    config: Annotated[Path | None, typer.Option("--config", "-c", help="Explicit configuration file.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every dropped diagnostic.")] = False,
) -> None:
    """Filter, order and render editor diagnostics."""

    configure_logging(verbose)
    ctx.obj = CLIState(root=root, config_path=config, verbose=verbose)


register_commands(app)

__all__ = ["app"]
