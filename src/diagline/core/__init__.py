# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core models and severity helpers."""

from __future__ import annotations

from .models import Diagnostic, Range, RelatedInfo, Sign, SignKind, SnapshotKey
from .severity import LEAST_SEVERE, Severity, coerce_severity, severity_rank

__all__ = [
    "LEAST_SEVERE",
    "Diagnostic",
    "Range",
    "RelatedInfo",
    "Severity",
    "Sign",
    "SignKind",
    "SnapshotKey",
    "coerce_severity",
    "severity_rank",
]
