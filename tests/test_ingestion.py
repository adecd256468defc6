# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for converting host payloads into diagnostics and signs."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from diagline.config.models import StatusColumnConfig
from diagline.core.models import Range, RelatedInfo, SignKind
from diagline.core.severity import Severity
from diagline.diagnostics.ingestion import (
    coerce_diagnostic,
    coerce_diagnostics,
    coerce_sign,
    coerce_signs,
)

HostFactory = Callable[..., dict[str, Any]]


def test_coerce_diagnostic_reads_host_fields(make_host_diagnostic: HostFactory) -> None:
    raw = make_host_diagnostic(lnum=3, col=4, end_lnum=5, end_col=0, severity=2, source="pyright", code="reportX")

    diagnostic = coerce_diagnostic(raw, buffer_id=7, namespace_id=2)

    assert diagnostic is not None
    assert diagnostic.buffer_id == 7
    assert diagnostic.namespace_id == 2
    assert diagnostic.range == Range(start_line=3, start_col=4, end_line=5, end_col=0)
    assert diagnostic.severity is Severity.WARN
    assert diagnostic.source == "pyright"
    assert diagnostic.code == "reportX"
    assert diagnostic.payload == raw


def test_missing_end_position_defaults_to_start(make_host_diagnostic: HostFactory) -> None:
    raw = make_host_diagnostic(lnum=2, col=6)
    del raw["end_lnum"]
    del raw["end_col"]

    diagnostic = coerce_diagnostic(raw, buffer_id=1, namespace_id=0)

    assert diagnostic is not None
    assert diagnostic.range == Range(start_line=2, start_col=6, end_line=2, end_col=6)


def test_missing_severity_defaults_to_error(make_host_diagnostic: HostFactory) -> None:
    raw = make_host_diagnostic()
    del raw["severity"]

    diagnostic = coerce_diagnostic(raw, buffer_id=1, namespace_id=0)

    assert diagnostic is not None
    assert diagnostic.severity is Severity.ERROR


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "not a mapping",
        {"col": 0, "message": "no line"},
        {"lnum": "x", "col": 0},
        {"lnum": 0, "col": 0, "severity": 9},
    ],
)
def test_unusable_payloads_are_dropped(raw: object) -> None:
    assert coerce_diagnostic(raw, buffer_id=1, namespace_id=0) is None


def test_lsp_user_data_is_preferred(make_host_diagnostic: HostFactory) -> None:
    raw = make_host_diagnostic(
        source="fallback",
        user_data={
            "lsp": {
                "source": "rustc",
                "code": 308,
                "data": {"rendered": "error[E0308]: mismatched types\n --> src/main.rs"},
                "relatedInformation": [
                    {
                        "location": {"range": {"start": {"line": 4, "character": 1}, "end": {"line": 4, "character": 9}}},
                        "message": "expected due to this",
                    },
                    {"message": "location missing"},
                ],
            }
        },
    )

    diagnostic = coerce_diagnostic(raw, buffer_id=1, namespace_id=0)

    assert diagnostic is not None
    assert diagnostic.source == "rustc"
    assert diagnostic.code == "308"
    assert diagnostic.rendered == "error[E0308]: mismatched types\n --> src/main.rs"
    assert diagnostic.related == (
        RelatedInfo(range=Range(start_line=4, start_col=1, end_line=4, end_col=9), message="expected due to this"),
    )


def test_coerce_diagnostics_skips_rejected_entries(make_host_diagnostic: HostFactory) -> None:
    batch = [make_host_diagnostic(message="kept"), {"bogus": True}, make_host_diagnostic(message="also kept")]

    diagnostics = coerce_diagnostics(batch, buffer_id=1, namespace_id=0)

    assert [diagnostic.message for diagnostic in diagnostics] == ["kept", "also kept"]


def test_coerce_sign_from_extmark() -> None:
    extmark = [12, 4, 0, {"sign_hl_group": "DiagnosticSignWarn", "sign_text": "W ", "priority": 10}]

    sign = coerce_sign(extmark, StatusColumnConfig(), buffer_id=3)

    assert sign is not None
    assert sign.kind is SignKind.DIAGNOSTIC
    assert sign.severity is Severity.WARN
    assert sign.line == 4
    assert sign.buffer_id == 3
    assert sign.text == "W "
    assert sign.priority == 10


def test_coerce_sign_classifies_version_control_marks() -> None:
    sign = coerce_sign({"sign_hl_group": "GitSignsChange", "sign_text": "┃"}, StatusColumnConfig())

    assert sign is not None
    assert sign.kind is SignKind.VERSION_CONTROL
    assert sign.severity is None


@pytest.mark.parametrize(
    "raw",
    [
        [1, 0, 0],
        [1, 0, 0, None],
        [1, 0, 0, {"sign_text": "?"}],
        {"sign_hl_group": "TodoSign", "sign_text": "T"},
        42,
    ],
)
def test_coerce_sign_drops_unrelated_marks(raw: object) -> None:
    assert coerce_sign(raw, StatusColumnConfig()) is None


def test_coerce_signs_keeps_input_order() -> None:
    marks = [
        [1, 0, 0, {"sign_hl_group": "GitSignsAdd", "sign_text": "+"}],
        [2, 0, 0, {"sign_hl_group": "Unrelated"}],
        [3, 0, 0, {"sign_hl_group": "DiagnosticSignError", "sign_text": "E"}],
    ]

    signs = coerce_signs(marks, StatusColumnConfig())

    assert [sign.highlight_group for sign in signs] == ["GitSignsAdd", "DiagnosticSignError"]
