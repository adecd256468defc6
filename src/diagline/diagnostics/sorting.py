# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Deterministic severity-then-position ordering of diagnostics."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import Diagnostic
from ..core.severity import severity_rank


def diagnostic_sort_key(diagnostic: Diagnostic) -> tuple[int, int, int]:
    """Return the ``(severity, start_line, start_col)`` ordering key.

    Args:
        diagnostic: Diagnostic to order. A missing severity ranks as the least
            urgent tier.

    Returns:
        tuple[int, int, int]: Key where smaller values sort first.
    """

    return (
        severity_rank(diagnostic.severity),
        diagnostic.range.start_line,
        diagnostic.range.start_col,
    )


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Return ``diagnostics`` ordered most urgent first, then in reading order.

    The sort is stable: entries with equal keys keep their input order.
    """

    return sorted(diagnostics, key=diagnostic_sort_key)


__all__ = ["diagnostic_sort_key", "sort_diagnostics"]
