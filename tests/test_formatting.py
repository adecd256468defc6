# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the single-line hover formatter."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from diagline.config.models import FormatterConfig
from diagline.core.models import Diagnostic
from diagline.core.severity import Severity
from diagline.diagnostics.formatting import (
    format_diagnostic,
    format_host_diagnostic,
    normalize_text,
    severity_style,
)

Factory = Callable[..., Diagnostic]


def test_trailing_period_and_newline_are_removed(make_diagnostic: Factory) -> None:
    diagnostic = make_diagnostic("unused var.\n", severity=Severity.WARN, source="rustc", code="E0001.")

    assert format_diagnostic(diagnostic) == "▶ unused var [rustc: E0001]"


def test_line_breaks_collapse_to_commas(make_diagnostic: Factory) -> None:
    diagnostic = make_diagnostic("first line\nsecond line\r\n\n  third.")

    assert format_diagnostic(diagnostic) == "▶ first line, second line, third"


@pytest.mark.parametrize(
    ("source", "code", "suffix"),
    [
        ("rustc", None, " [rustc]"),
        (None, "E42", " [E42]"),
        (None, None, ""),
    ],
)
def test_source_suffix_variants(make_diagnostic: Factory, source: str | None, code: str | None, suffix: str) -> None:
    diagnostic = make_diagnostic("msg", source=source, code=code)

    assert format_diagnostic(diagnostic) == f"▶ msg{suffix}"


def test_rendered_message_is_preferred(make_diagnostic: Factory) -> None:
    diagnostic = make_diagnostic("short", rendered="error[E0308]: mismatched types\n --> src/main.rs:4:1\n")

    assert format_diagnostic(diagnostic) == "▶ error[E0308]: mismatched types, --> src/main.rs:4:1"


def test_range_suffix(make_diagnostic: Factory) -> None:
    diagnostic = make_diagnostic("msg", line=1, col=2, end_line=3, end_col=4, source="ruff")

    assert format_diagnostic(diagnostic, include_range=True) == "▶ msg [ruff] @ 1:2;3:4"


def test_glyph_comes_from_configuration(make_diagnostic: Factory) -> None:
    diagnostic = make_diagnostic("msg")

    assert format_diagnostic(diagnostic, config=FormatterConfig(glyph="●")) == "● msg"
    assert format_diagnostic(diagnostic, config=FormatterConfig(glyph="")) == "msg"


@pytest.mark.parametrize("message", ["a\nb", "a\rb", "a b", "\n\n", "tail\n"])
def test_output_never_contains_line_breaks(make_diagnostic: Factory, message: str) -> None:
    formatted = format_diagnostic(make_diagnostic(message, source="src\nname", code="c\r"))

    assert formatted.splitlines() == [formatted]


def test_normalize_text_strips_one_period() -> None:
    assert normalize_text("done..") == "done."
    assert normalize_text(None) == ""


def test_host_payloads_are_formatted(make_host_diagnostic: Callable[..., dict[str, Any]]) -> None:
    raw = make_host_diagnostic(message="boom.", col=1, end_col=4, source="luacheck", code=211)

    assert format_host_diagnostic(raw) == "▶ boom [luacheck: 211]"
    assert format_host_diagnostic(raw, include_range=True) == "▶ boom [luacheck: 211] @ 0:1;0:4"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ({"message": "no position.\n", "source": "x"}, "▶ no position [x]"),
        ({"message": None, "code": True}, "▶"),
        (None, "▶"),
        ([1, 2], "▶"),
    ],
)
def test_host_formatter_never_fails(raw: object, expected: str) -> None:
    assert format_host_diagnostic(raw, include_range=True) == expected


def test_unrecognised_severity_keeps_the_position() -> None:
    raw = {"lnum": 2, "col": 1, "end_lnum": 2, "end_col": 4, "severity": "fatal", "message": "m"}

    assert format_host_diagnostic(raw, include_range=True) == "▶ m @ 2:1;2:4"
    assert format_host_diagnostic(raw) == "▶ m"
    assert format_host_diagnostic({**raw, "lnum": "?"}, include_range=True) == "▶ m"


def test_severity_style_treats_missing_severity_as_ok(make_diagnostic: Factory) -> None:
    assert severity_style(make_diagnostic("m", severity=Severity.WARN)) == "DiagnosticFloatingWarn"
    assert severity_style(make_diagnostic("m", severity=None)) == "DiagnosticFloatingOk"
