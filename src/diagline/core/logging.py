# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console messages and the package log handler."""

from __future__ import annotations

import logging
from typing import Final

from rich.logging import RichHandler
from rich.text import Text

from ..runtime.console import detect_tty, get_console_manager

PACKAGE_LOGGER: Final[str] = "diagline"


def _print_line(msg: str, *, style: str, use_color: bool | None = None, stderr: bool = False) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_color: Optional explicit colour flag overriding TTY detection.
        stderr: Route the message to standard error.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=False, stderr=stderr)
    text = Text(msg)
    if color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    _print_line(msg, style="cyan", use_color=use_color)


def fail(msg: str, *, use_color: bool | None = None) -> None:
    """Emit an error message on standard error."""

    _print_line(msg, style="red", use_color=use_color, stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route the package logger through a Rich handler on standard error.

    Args:
        verbose: Emit DEBUG records (every dropped diagnostic) instead of warnings only.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return
    console = get_console_manager().get(color=detect_tty(), emoji=False, stderr=True)
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)


__all__ = ["configure_logging", "fail", "info"]
