# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Commands processing a JSON batch of host diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ...core.models import Diagnostic
from ...core.severity import LEAST_SEVERE
from ...runtime.console import detect_tty, get_console_manager
from ..shared import build_engine, echo_json, read_json_list

BatchFile = Annotated[Path, typer.Argument(help="JSON array of host diagnostics ('-' reads stdin).")]
BufferPath = Annotated[str, typer.Option("--path", "-p", help="Path of the buffer owning the batch.")]
BufferId = Annotated[int, typer.Option("--buffer", "-b", help="Buffer id of the batch.")]
NamespaceId = Annotated[int, typer.Option("--namespace", "-n", help="Namespace id of the batch.")]


def _process(ctx: typer.Context, file: Path, path: str, buffer: int, namespace: int) -> list[Diagnostic]:
    engine = build_engine(ctx)
    return engine.ingest(buffer, namespace, path, read_json_list(file))


def filter_command(
    ctx: typer.Context,
    file: BatchFile,
    path: BufferPath = "",
    buffer: BufferId = 1,
    namespace: NamespaceId = 0,
) -> None:
    """Print the filtered, ordered batch as host JSON."""

    diagnostics = _process(ctx, file, path, buffer, namespace)
    echo_json([diagnostic.to_host() for diagnostic in diagnostics])


def inspect_command(
    ctx: typer.Context,
    file: BatchFile,
    path: BufferPath = "",
    buffer: BufferId = 1,
    namespace: NamespaceId = 0,
) -> None:
    """Show the filtered, ordered batch as a table."""

    engine = build_engine(ctx)
    diagnostics = engine.ingest(buffer, namespace, path, read_json_list(file))
    table = Table(title=path or None, show_lines=False)
    table.add_column("Severity")
    table.add_column("Position", no_wrap=True)
    table.add_column("Source")
    table.add_column("Highlight", no_wrap=True)
    table.add_column("Message", overflow="fold")
    for diagnostic in diagnostics:
        severity = diagnostic.severity or LEAST_SEVERE
        table.add_row(
            severity.value,
            diagnostic.range.describe(),
            diagnostic.source or "",
            engine.style(diagnostic),
            engine.format(diagnostic, include_range=False),
        )
    console = get_console_manager().get(color=detect_tty(), emoji=False)
    console.print(table)
    typer.echo(f"{len(diagnostics)} diagnostic(s) displayed")


def format_command(
    ctx: typer.Context,
    file: BatchFile,
    include_range: Annotated[bool, typer.Option("--range", help="Append the zero-based position.")] = False,
) -> None:
    """Print one hover line per host diagnostic."""

    engine = build_engine(ctx)
    for raw in read_json_list(file):
        typer.echo(engine.format(raw, include_range=include_range or None))


def register(app: typer.Typer) -> None:
    """Register the batch processing commands on ``app``."""

    app.command("filter")(filter_command)
    app.command("inspect")(inspect_command)
    app.command("format")(format_command)


__all__ = ["filter_command", "format_command", "inspect_command", "register"]
