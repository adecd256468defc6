# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration inspection commands."""

from __future__ import annotations

from typing import Annotated

import typer

from ..shared import echo_json, load_result
from ..typer_ext import create_typer

config_app = create_typer(help="Inspect the effective configuration.")


@config_app.command("show")
def config_show(
    ctx: typer.Context,
    sources: Annotated[bool, typer.Option("--sources", help="List the sources that contributed.")] = False,
) -> None:
    """Print the effective configuration as JSON."""

    result = load_result(ctx)
    echo_json(result.config.to_dict())
    if sources:
        typer.echo("\n# Sources")
        for source in result.sources:
            typer.echo(f"- {source}")


def register(app: typer.Typer) -> None:
    """Attach the configuration sub-commands to ``app``."""

    app.add_typer(config_app, name="config")


__all__ = ["config_app", "config_show", "register"]
