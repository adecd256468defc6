# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Interpose the engine on the host's diagnostic publication entry point."""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Final

from .host.protocols import BufferPathResolver, SetDiagnostics

if TYPE_CHECKING:
    from .engine import DiagnosticEngine

LOGGER = logging.getLogger(__name__)

WRAPPED_MARKER: Final[str] = "__diagline_wrapped__"


def is_wrapped(function: object) -> bool:
    """Return ``True`` when ``function`` was produced by :func:`wrap_set_diagnostics`."""

    return bool(getattr(function, WRAPPED_MARKER, False))


def wrap_set_diagnostics(
    original: SetDiagnostics,
    engine: DiagnosticEngine,
    buffer_path: BufferPathResolver,
) -> SetDiagnostics:
    """Return ``original`` wrapped so every batch is filtered, ordered and recorded.

    The wrapper keeps the host signature ``(namespace_id, buffer_id,
    diagnostics, display_opts)``. It stores the processed batch in the engine
    snapshot and delegates the ordered host payloads to ``original``. Wrapping
    an already wrapped function returns it unchanged.

    Args:
        original: Host entry point to delegate to.
        engine: Engine receiving the batches.
        buffer_path: Resolver turning a buffer id into its file path.

    Returns:
        SetDiagnostics: Wrapped entry point.
    """

    if is_wrapped(original):
        LOGGER.debug("set-diagnostics entry point already wrapped")
        return original

    @functools.wraps(original)
    def wrapper(
        namespace_id: int,
        buffer_id: int,
        diagnostics: Sequence[Mapping[str, Any]],
        display_opts: Mapping[str, Any] | None = None,
        /,
    ) -> object:
        kept = engine.ingest(buffer_id, namespace_id, buffer_path(buffer_id), diagnostics)
        return original(namespace_id, buffer_id, [diagnostic.to_host() for diagnostic in kept], display_opts)

    setattr(wrapper, WRAPPED_MARKER, True)
    return wrapper


__all__ = ["WRAPPED_MARKER", "is_wrapped", "wrap_set_diagnostics"]
