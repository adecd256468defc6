# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Composable coerce, filter and sort pipeline for incoming batches."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..config.models import FilterConfig
from ..core.models import Diagnostic, SnapshotKey
from .filtering import filter_diagnostics
from .ingestion import coerce_diagnostics
from .sorting import sort_diagnostics

Normalizer = Callable[[Sequence[object], int, int], list[Diagnostic]]
Filterer = Callable[[Sequence[Diagnostic], str, FilterConfig], list[Diagnostic]]
Sorter = Callable[[Sequence[Diagnostic]], list[Diagnostic]]


@dataclass(frozen=True, slots=True)
class BatchRequest:
    """Describe one host publication of diagnostics.

    Attributes:
        buffer_id: Buffer the batch belongs to.
        namespace_id: Namespace (producer) that published the batch.
        buffer_path: File path of the buffer, used by ignore globs and rules.
        candidates: Raw host diagnostic payloads.
        config: Filter configuration in effect.
    """

    buffer_id: int
    namespace_id: int
    buffer_path: str
    candidates: Sequence[object]
    config: FilterConfig = field(default_factory=FilterConfig)

    @property
    def key(self) -> SnapshotKey:
        """Return the snapshot key addressed by the batch."""

        return (self.buffer_id, self.namespace_id)


def _default_normalizer(candidates: Sequence[object], buffer_id: int, namespace_id: int) -> list[Diagnostic]:
    return coerce_diagnostics(candidates, buffer_id=buffer_id, namespace_id=namespace_id)


def _default_filter(diagnostics: Sequence[Diagnostic], buffer_path: str, config: FilterConfig) -> list[Diagnostic]:
    return filter_diagnostics(buffer_path, diagnostics, config=config)


@dataclass(slots=True)
class DiagnosticPipeline:
    """Pipeline that coerces raw payloads, filters them and orders the survivors.

    Attributes:
        normalize: Callable converting host payloads into :class:`Diagnostic` models.
        filter: Callable dropping diagnostics that should not be displayed.
        sort: Callable ordering the retained diagnostics.
    """

    normalize: Normalizer = _default_normalizer
    filter: Filterer = _default_filter
    sort: Sorter = sort_diagnostics

    def run(self, request: BatchRequest) -> list[Diagnostic]:
        """Execute the pipeline and return the diagnostics to display.

        Args:
            request: Batch published by the host.

        Returns:
            list[Diagnostic]: Filtered diagnostics in display order.
        """

        normalized = self.normalize(request.candidates, request.buffer_id, request.namespace_id)
        retained = self.filter(normalized, request.buffer_path, request.config)
        return self.sort(retained)


__all__ = ["BatchRequest", "DiagnosticPipeline"]
