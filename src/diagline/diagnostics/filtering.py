# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for suppressing, validating and deduplicating diagnostic batches."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

from ..config.models import FilterConfig
from ..core.models import Diagnostic, Range, RelatedInfo
from ..core.severity import severity_rank

LOGGER = logging.getLogger(__name__)

DuplicateKey: TypeAlias = tuple[Range, str]


@dataclass(slots=True)
class _DedupEntry:
    """Track the diagnostic retained for a ``(range, message)`` key."""

    diagnostic: Diagnostic
    position: int


@dataclass(slots=True)
class RangeMessageDeduper:
    """Collapse diagnostics sharing a range and message into the most severe one."""

    entries: dict[DuplicateKey, _DedupEntry] = field(default_factory=dict)
    order: list[DuplicateKey] = field(default_factory=list)

    def add(self, diagnostic: Diagnostic) -> None:
        """Record ``diagnostic``, replacing a less severe duplicate in place.

        Args:
            diagnostic: Diagnostic that survived every other filter stage.
        """

        key = (diagnostic.range, diagnostic.message)
        existing = self.entries.get(key)
        if existing is None:
            self.entries[key] = _DedupEntry(diagnostic, len(self.order))
            self.order.append(key)
            return
        if severity_rank(diagnostic.severity) < severity_rank(existing.diagnostic.severity):
            LOGGER.debug("duplicate %r replaces less severe %r", diagnostic, existing.diagnostic)
            existing.diagnostic = diagnostic
        else:
            LOGGER.debug("dropping duplicate diagnostic %r", diagnostic)

    def result(self) -> list[Diagnostic]:
        """Return the retained diagnostics in first-occurrence order."""

        return [self.entries[key].diagnostic for key in self.order]


def related_info_keys(diagnostics: Sequence[Diagnostic]) -> frozenset[RelatedInfo]:
    """Return every related-information entry carried by ``diagnostics``.

    Args:
        diagnostics: Batch whose ``related`` entries should be collected.

    Returns:
        frozenset[RelatedInfo]: Locations and messages already rendered by root
        diagnostics.
    """

    return frozenset(info for diagnostic in diagnostics for info in diagnostic.related)


def _repeats_related_info(diagnostic: Diagnostic, related: frozenset[RelatedInfo]) -> bool:
    if not related:
        return False
    return RelatedInfo(range=diagnostic.range, message=diagnostic.message) in related


def filter_diagnostics(
    buffer_path: str,
    diagnostics: Sequence[Diagnostic],
    *,
    config: FilterConfig | None = None,
) -> list[Diagnostic]:
    """Return the diagnostics of one batch that should be displayed.

    Stages, in order: ignored buffer paths drop the whole batch, out-of-order
    ranges are dropped, suppression rules are applied, entries repeating a
    related-information item of the batch are dropped, then duplicates sharing
    range and message collapse to the most severe entry.

    Args:
        buffer_path: Path of the buffer owning the batch.
        diagnostics: Diagnostics received for the buffer. Never mutated.
        config: Filter configuration; defaults to :class:`FilterConfig`.

    Returns:
        list[Diagnostic]: Retained diagnostics. Re-filtering the result yields
        the same list.
    """

    cfg = config or FilterConfig()
    if not diagnostics:
        return []
    if cfg.ignores(buffer_path):
        LOGGER.debug("ignoring %d diagnostics for ignored path %s", len(diagnostics), buffer_path)
        return []

    related = related_info_keys(diagnostics) if cfg.related_info else frozenset()
    deduper = RangeMessageDeduper()
    kept: list[Diagnostic] = []
    for diagnostic in diagnostics:
        if not diagnostic.range.is_ordered:
            LOGGER.debug("dropping diagnostic with inconsistent range %s", diagnostic.range.describe())
            continue
        if any(rule.matches(diagnostic, buffer_path) for rule in cfg.suppressions):
            LOGGER.debug("suppressed diagnostic %s/%s: %s", diagnostic.source, diagnostic.code, diagnostic.message)
            continue
        if _repeats_related_info(diagnostic, related):
            LOGGER.debug("dropping diagnostic repeated by related information: %s", diagnostic.message)
            continue
        if cfg.dedupe:
            deduper.add(diagnostic)
        else:
            kept.append(diagnostic)
    return deduper.result() if cfg.dedupe else kept


__all__ = [
    "RangeMessageDeduper",
    "filter_diagnostics",
    "related_info_keys",
]
