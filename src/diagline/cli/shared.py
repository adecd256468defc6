# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers shared by the diagline CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import typer

from ..config.loaders import ConfigLoader, ConfigLoadResult
from ..core.logging import fail
from ..engine import DiagnosticEngine
from ..errors import ConfigError

STDIN_MARKER: Final[str] = "-"
CONFIG_ERROR_EXIT: Final[int] = 2


@dataclass(slots=True)
class CLIState:
    """Options captured by the application callback for every sub-command."""

    root: Path
    config_path: Path | None = None
    verbose: bool = False


def get_state(ctx: typer.Context) -> CLIState:
    """Return the :class:`CLIState` stored on ``ctx`` (defaults when absent)."""

    state = ctx.find_root().obj
    if isinstance(state, CLIState):
        return state
    return CLIState(root=Path.cwd())


def load_result(ctx: typer.Context) -> ConfigLoadResult:
    """Load the configuration for the invocation, exiting on invalid input.

    Raises:
        typer.Exit: With code ``2`` when the configuration is invalid.
    """

    state = get_state(ctx)
    try:
        return ConfigLoader.for_root(state.root, config_path=state.config_path).load()
    except ConfigError as exc:
        fail(str(exc))
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from exc


def build_engine(ctx: typer.Context) -> DiagnosticEngine:
    return DiagnosticEngine(load_result(ctx).config)


def read_json_list(path: Path, *, label: str = "FILE") -> list[Any]:
    """Read a JSON array from ``path`` (``-`` reads standard input).

    Args:
        path: File holding the JSON document.
        label: Parameter name reported in error messages.

    Returns:
        list[Any]: Decoded array.

    Raises:
        typer.BadParameter: When the file is missing, unreadable or not a JSON array.
    """

    if str(path) == STDIN_MARKER:
        text = typer.get_text_stream("stdin").read()
    else:
        if not path.is_file():
            raise typer.BadParameter(f"{path} does not exist", param_hint=label)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise typer.BadParameter(f"cannot read {path}: {exc}", param_hint=label) from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"invalid JSON: {exc}", param_hint=label) from exc
    if not isinstance(payload, list):
        raise typer.BadParameter("expected a JSON array", param_hint=label)
    return payload


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


__all__ = [
    "CLIState",
    "build_engine",
    "echo_json",
    "get_state",
    "load_result",
    "read_json_list",
]
