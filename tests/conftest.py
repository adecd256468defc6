# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from diagline.core.models import Diagnostic, Range, RelatedInfo, Sign, SignKind
from diagline.core.severity import Severity

DiagnosticFactory = Callable[..., Diagnostic]
SignFactory = Callable[..., Sign]


@pytest.fixture
def make_diagnostic() -> DiagnosticFactory:
    """Return a factory building diagnostics with compact positional defaults."""

    def _make(
        message: str = "message",
        *,
        severity: Severity | None = Severity.ERROR,
        line: int = 0,
        col: int = 0,
        end_line: int | None = None,
        end_col: int | None = None,
        buffer_id: int = 1,
        namespace_id: int = 0,
        source: str | None = None,
        code: str | None = None,
        rendered: str | None = None,
        related: tuple[RelatedInfo, ...] = (),
        payload: dict[str, Any] | None = None,
    ) -> Diagnostic:
        return Diagnostic(
            buffer_id=buffer_id,
            namespace_id=namespace_id,
            range=Range(
                start_line=line,
                start_col=col,
                end_line=line if end_line is None else end_line,
                end_col=col if end_col is None else end_col,
            ),
            severity=severity,
            message=message,
            source=source,
            code=code,
            rendered=rendered,
            related=related,
            payload=payload or {},
        )

    return _make


@pytest.fixture
def make_sign() -> SignFactory:
    """Return a factory building diagnostic or version-control signs."""

    def _make(
        highlight_group: str,
        text: str = "",
        *,
        severity: Severity | None = None,
        priority: int = 0,
        line: int = 0,
    ) -> Sign:
        kind = SignKind.DIAGNOSTIC if severity is not None else SignKind.VERSION_CONTROL
        return Sign(
            line=line,
            highlight_group=highlight_group,
            text=text,
            kind=kind,
            severity=severity,
            priority=priority,
        )

    return _make


def host_diagnostic(**overrides: Any) -> dict[str, Any]:
    """Return a host diagnostic dictionary as published by ``vim.diagnostic.set``."""

    payload: dict[str, Any] = {
        "lnum": 0,
        "col": 0,
        "end_col": 1,
        "severity": 1,
        "message": "boom",
    }
    payload.update(overrides)
    payload.setdefault("end_lnum", payload["lnum"])
    return payload


@pytest.fixture
def make_host_diagnostic() -> Callable[..., dict[str, Any]]:
    return host_diagnostic
