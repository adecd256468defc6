# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command serving the engine to a running Neovim."""

from __future__ import annotations

from typing import Annotated

import typer

from ...core.logging import fail, info
from ...errors import HostError
from ...host.nvim import serve
from ..shared import build_engine


def serve_command(
    ctx: typer.Context,
    socket: Annotated[
        str,
        typer.Option("--socket", "-s", envvar="NVIM", help="Neovim RPC socket path."),
    ],
) -> None:
    """Attach to Neovim and answer diagnostic callbacks until it exits."""

    engine = build_engine(ctx)
    info(f"serving diagline on {socket}")
    try:
        serve(socket, engine)
    except HostError as exc:
        fail(str(exc))
        raise typer.Exit(code=1) from exc


def register(app: typer.Typer) -> None:
    """Register the ``serve`` command on ``app``."""

    app.command("serve")(serve_command)


__all__ = ["register", "serve_command"]
