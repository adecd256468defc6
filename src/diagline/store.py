# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Snapshot map of displayed diagnostics keyed by buffer and namespace."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .core.models import Diagnostic, SnapshotKey

LOGGER = logging.getLogger(__name__)


class DiagnosticStore:
    """Hold the latest filtered, ordered batch for every ``(buffer, namespace)`` key.

    Batches are stored as immutable tuples and replaced wholesale, so a reader
    sees either the previous batch or the new one, never a mix.
    """

    def __init__(self) -> None:
        self._snapshots: dict[SnapshotKey, tuple[Diagnostic, ...]] = {}

    def __len__(self) -> int:
        return len(self._snapshots)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshots

    def replace(self, key: SnapshotKey, diagnostics: Iterable[Diagnostic]) -> tuple[Diagnostic, ...]:
        """Swap the snapshot for ``key``.

        An empty batch removes the key, matching a producer clearing its
        diagnostics.

        Args:
            key: ``(buffer_id, namespace_id)`` addressed by the batch.
            diagnostics: Filtered and ordered diagnostics.

        Returns:
            tuple[Diagnostic, ...]: The stored snapshot.
        """

        snapshot = tuple(diagnostics)
        if snapshot:
            self._snapshots[key] = snapshot
        else:
            self._snapshots.pop(key, None)
        LOGGER.debug("snapshot %s now holds %d diagnostics", key, len(snapshot))
        return snapshot

    def drop_buffer(self, buffer_id: int) -> int:
        """Remove every snapshot of ``buffer_id`` and return how many were removed."""

        return self.reset(buffer_id=buffer_id)

    def reset(self, namespace_id: int | None = None, buffer_id: int | None = None) -> int:
        """Remove the snapshots matching the given namespace and buffer.

        ``None`` matches every namespace or every buffer, so ``reset()`` empties
        the store the way a host-wide diagnostic reset does.

        Args:
            namespace_id: Namespace to clear, or ``None`` for all namespaces.
            buffer_id: Buffer to clear, or ``None`` for all buffers.

        Returns:
            int: Number of snapshots removed.
        """

        keys = [
            key
            for key in self._snapshots
            if (buffer_id is None or key[0] == buffer_id) and (namespace_id is None or key[1] == namespace_id)
        ]
        for key in keys:
            del self._snapshots[key]
        if keys:
            LOGGER.debug("dropped %d snapshots (buffer=%s, namespace=%s)", len(keys), buffer_id, namespace_id)
        return len(keys)

    def get(self, key: SnapshotKey) -> tuple[Diagnostic, ...]:
        return self._snapshots.get(key, ())

    def buffer(self, buffer_id: int) -> tuple[Diagnostic, ...]:
        """Return the diagnostics of ``buffer_id`` across namespaces, by namespace id."""

        return tuple(
            diagnostic
            for key in sorted(self._snapshots)
            if key[0] == buffer_id
            for diagnostic in self._snapshots[key]
        )

    def workspace(self) -> tuple[Diagnostic, ...]:
        """Return every stored diagnostic ordered by buffer id, then namespace id."""

        return tuple(diagnostic for key in sorted(self._snapshots) for diagnostic in self._snapshots[key])

    def keys(self) -> list[SnapshotKey]:
        return sorted(self._snapshots)

    def clear(self) -> None:
        self._snapshots.clear()


__all__ = ["DiagnosticStore"]
