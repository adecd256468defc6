# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for severity-then-position ordering."""

from __future__ import annotations

from collections.abc import Callable

from diagline.core.models import Diagnostic
from diagline.core.severity import Severity
from diagline.diagnostics.sorting import diagnostic_sort_key, sort_diagnostics

Factory = Callable[..., Diagnostic]


def test_sort_orders_by_severity_then_position(make_diagnostic: Factory) -> None:
    hint = make_diagnostic("hint", severity=Severity.HINT)
    late_error = make_diagnostic("late", line=5)
    right_error = make_diagnostic("right", line=1, col=3)
    left_error = make_diagnostic("left", line=1, col=0)
    warning = make_diagnostic("warn", severity=Severity.WARN)

    ordered = sort_diagnostics([hint, late_error, right_error, left_error, warning])

    assert [diagnostic.message for diagnostic in ordered] == ["left", "right", "late", "warn", "hint"]


def test_sort_is_stable_for_equal_keys(make_diagnostic: Factory) -> None:
    first = make_diagnostic("first", line=2)
    second = make_diagnostic("second", line=2)

    assert sort_diagnostics([first, second]) == [first, second]
    assert sort_diagnostics([second, first]) == [second, first]


def test_missing_severity_sorts_last(make_diagnostic: Factory) -> None:
    unknown = make_diagnostic("unknown", severity=None)
    hint = make_diagnostic("hint", severity=Severity.HINT, line=9)

    assert sort_diagnostics([unknown, hint]) == [hint, unknown]
    assert diagnostic_sort_key(unknown) == (Severity.OK.rank, 0, 0)


def test_sort_is_idempotent(make_diagnostic: Factory) -> None:
    batch = [
        make_diagnostic("b", severity=Severity.INFO, line=1),
        make_diagnostic("a", severity=Severity.ERROR, line=4),
        make_diagnostic("c", severity=Severity.INFO, line=0),
    ]

    once = sort_diagnostics(batch)

    assert sort_diagnostics(once) == once
