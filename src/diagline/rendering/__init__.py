# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Host status expression renderers."""

from __future__ import annotations

from .statuscolumn import draw_statuscolumn, highlight_cell, select_diagnostic_sign, select_vcs_sign
from .statusline import SeverityCounts, display_path, draw_badges, draw_statusline

__all__ = [
    "SeverityCounts",
    "display_path",
    "draw_badges",
    "draw_statuscolumn",
    "draw_statusline",
    "highlight_cell",
    "select_diagnostic_sign",
    "select_vcs_sign",
]
