# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Diagnostic ingestion, filtering, ordering and formatting helpers."""

from __future__ import annotations

from .filtering import RangeMessageDeduper, filter_diagnostics, related_info_keys
from .formatting import format_diagnostic, format_host_diagnostic, normalize_text, severity_style
from .ingestion import (
    classify_sign_group,
    coerce_diagnostic,
    coerce_diagnostics,
    coerce_range,
    coerce_sign,
    coerce_signs,
)
from .pipeline import BatchRequest, DiagnosticPipeline
from .sorting import diagnostic_sort_key, sort_diagnostics

__all__ = [
    "BatchRequest",
    "DiagnosticPipeline",
    "RangeMessageDeduper",
    "classify_sign_group",
    "coerce_diagnostic",
    "coerce_diagnostics",
    "coerce_range",
    "coerce_sign",
    "coerce_signs",
    "diagnostic_sort_key",
    "filter_diagnostics",
    "format_diagnostic",
    "format_host_diagnostic",
    "normalize_text",
    "related_info_keys",
    "severity_style",
    "sort_diagnostics",
]
