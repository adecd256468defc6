# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Commands rendering the status line and the status column."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Annotated, Any

import typer

from ...rendering.statusline import display_path
from ..shared import build_engine, read_json_list

_KEY_FIELDS = ("bufnr", "namespace")


def _parse_cursor(value: str | None) -> tuple[int, int] | None:
    if value is None:
        return None
    row, sep, col = value.partition(":")
    if not sep or not row.strip().isdecimal() or not col.strip().isdecimal():
        raise typer.BadParameter("expected ROW:COL", param_hint="--cursor")
    return int(row), int(col)


def _group_batches(payload: list[Any], default_buffer: int) -> dict[tuple[int, int], list[Any]]:
    batches: dict[tuple[int, int], list[Any]] = defaultdict(list)
    for raw in payload:
        if not isinstance(raw, dict):
            continue
        buffer_id, namespace_id = (raw.get(field) for field in _KEY_FIELDS)
        key = (
            buffer_id if isinstance(buffer_id, int) else default_buffer,
            namespace_id if isinstance(namespace_id, int) else 0,
        )
        batches[key].append(raw)
    return batches


def statusline_command(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="JSON array of workspace diagnostics carrying bufnr/namespace.")],
    buffer: Annotated[int, typer.Option("--buffer", "-b", help="Buffer shown in the focused window.")] = 1,
    path: Annotated[str, typer.Option("--path", "-p", help="Path of the focused buffer.")] = "",
    cwd: Annotated[str | None, typer.Option("--cwd", help="Working directory stripped from the path.")] = None,
    cursor: Annotated[str | None, typer.Option("--cursor", help="Cursor position as ROW:COL.")] = None,
) -> None:
    """Print the status line for the focused buffer."""

    engine = build_engine(ctx)
    position = _parse_cursor(cursor)
    for (buffer_id, namespace_id), batch in sorted(_group_batches(read_json_list(file), buffer).items()):
        buffer_path = path if buffer_id == buffer else ""
        engine.ingest(buffer_id, namespace_id, buffer_path, batch)
    typer.echo(engine.draw_statusline(buffer, display_path(path, cwd), cursor=position))


def statuscolumn_command(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="JSON array of extmarks placed on the line.")],
    line: Annotated[int | None, typer.Option("--line", "-l", help="Line number appended to the gutter.")] = None,
    buftype: Annotated[str | None, typer.Option("--buftype", help="Host buftype of the buffer.")] = None,
) -> None:
    """Print the gutter cells for one line."""

    engine = build_engine(ctx)
    typer.echo(engine.draw_statuscolumn(read_json_list(file), line_number=line, buffer_type=buftype))


def register(app: typer.Typer) -> None:
    """Register the rendering commands on ``app``."""

    app.command("statusline")(statusline_command)
    app.command("statuscolumn")(statuscolumn_command)


__all__ = ["register", "statuscolumn_command", "statusline_command"]
