# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Gutter rendering: one diagnostic cell followed by one version-control cell."""

from __future__ import annotations

from collections.abc import Iterable

from ..config.models import StatusColumnConfig
from ..core.models import Sign, SignKind
from ..core.severity import severity_rank


def highlight_cell(group: str, glyph: str, placeholder: str) -> str:
    """Return ``%#group#glyph%*`` or ``placeholder`` when there is nothing to show.

    Args:
        group: Host highlight group applied to the glyph.
        glyph: Text rendered inside the cell.
        placeholder: Single-width filler used for empty cells.

    Returns:
        str: Host status expression for the cell.
    """

    if not glyph:
        return placeholder
    return f"%#{group}#{glyph}%*"


def select_diagnostic_sign(signs: Iterable[Sign]) -> Sign | None:
    """Return the diagnostic sign that wins the line.

    The most severe sign wins; a higher ``priority`` breaks severity ties and
    the first sign encountered wins remaining ties.
    """

    chosen: Sign | None = None
    chosen_key: tuple[int, int] | None = None
    for sign in signs:
        if sign.kind is not SignKind.DIAGNOSTIC:
            continue
        key = (severity_rank(sign.severity), -sign.priority)
        if chosen_key is None or key < chosen_key:
            chosen, chosen_key = sign, key
    return chosen


def select_vcs_sign(signs: Iterable[Sign]) -> Sign | None:
    """Return the first version-control sign in input order."""

    return next((sign for sign in signs if sign.kind is SignKind.VERSION_CONTROL), None)


def _diagnostic_glyph(sign: Sign, config: StatusColumnConfig) -> str:
    if sign.severity is not None and sign.severity in config.glyphs:
        return config.glyphs[sign.severity]
    return sign.text.strip()


def draw_statuscolumn(
    signs: Iterable[Sign],
    *,
    line_number: int | str | None = None,
    buffer_type: str | None = None,
    config: StatusColumnConfig | None = None,
) -> str:
    """Render the gutter cells for one buffer line.

    Args:
        signs: Signs placed on the line, in host order. Sign kinds outside
            :class:`SignKind` never reach this function.
        line_number: Optional line number appended as a right-aligned segment.
        buffer_type: Host ``buftype`` of the buffer; minimal buffer types render
            a single placeholder.
        config: Status column configuration.

    Returns:
        str: Diagnostic cell, then version-control cell, then the optional
        line-number segment. Never fails; empty input yields two placeholders.
    """

    cfg = config or StatusColumnConfig()
    if buffer_type is not None and buffer_type in cfg.minimal_buffer_types:
        return cfg.placeholder

    candidates = list(signs)
    diagnostic = select_diagnostic_sign(candidates)
    vcs = select_vcs_sign(candidates)

    diagnostic_cell = cfg.placeholder
    if diagnostic is not None:
        glyph = _diagnostic_glyph(diagnostic, cfg)
        diagnostic_cell = highlight_cell(diagnostic.highlight_group, glyph, cfg.placeholder)
    vcs_cell = cfg.placeholder
    if vcs is not None:
        vcs_cell = highlight_cell(vcs.highlight_group, vcs.text.strip(), cfg.placeholder)

    rendered = f"{diagnostic_cell}{vcs_cell}"
    if line_number is not None:
        rendered += f"%=% {line_number} "
    return rendered


__all__ = [
    "draw_statuscolumn",
    "highlight_cell",
    "select_diagnostic_sign",
    "select_vcs_sign",
]
