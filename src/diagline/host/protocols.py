# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the editor entry points diagline interposes on."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SetDiagnostics(Protocol):
    """Host entry point publishing a diagnostic batch for ``(namespace, buffer)``."""

    def __call__(
        self,
        namespace_id: int,
        buffer_id: int,
        diagnostics: Sequence[Mapping[str, Any]],
        display_opts: Mapping[str, Any] | None = None,
        /,
    ) -> object:
        """Publish ``diagnostics`` and return whatever the host returns."""

        raise NotImplementedError


@runtime_checkable
class BufferPathResolver(Protocol):
    """Resolve a buffer id into the file path the buffer shows."""

    def __call__(self, buffer_id: int, /) -> str:
        """Return the path of ``buffer_id`` (an empty string for unnamed buffers)."""

        raise NotImplementedError


__all__ = ["BufferPathResolver", "SetDiagnostics"]
