# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Status bar rendering with current-buffer and workspace severity badges."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import PurePath

from ..config.models import StatusLineConfig
from ..core.models import Diagnostic
from ..core.severity import LEAST_SEVERE, Severity


@dataclass(slots=True)
class SeverityCounts:
    """Tally of diagnostics per severity tier.

    Diagnostics without a severity are tallied with the least severe tier.
    """

    counts: Counter[Severity] = field(default_factory=Counter)

    @classmethod
    def from_diagnostics(cls, diagnostics: Iterable[Diagnostic]) -> SeverityCounts:
        """Return the counts of ``diagnostics``."""

        tally = cls()
        for diagnostic in diagnostics:
            tally.add(diagnostic.severity)
        return tally

    def add(self, severity: Severity | None) -> None:
        self.counts[severity or LEAST_SEVERE] += 1

    def get(self, severity: Severity) -> int:
        return self.counts.get(severity, 0)

    def total(self) -> int:
        return sum(self.counts.values())

    def nonzero(self) -> list[tuple[Severity, int]]:
        """Return ``(severity, count)`` pairs in severity order, omitting zero counts."""

        return [(severity, self.get(severity)) for severity in Severity if self.get(severity) > 0]


def draw_badges(counts: SeverityCounts, config: StatusLineConfig) -> str:
    """Render ``%#group#L:n`` badges separated by single spaces.

    Args:
        counts: Severity tally to render.
        config: Status line configuration supplying letters and groups.

    Returns:
        str: Badge string, empty when every count is zero.
    """

    badges: list[str] = []
    for severity, count in counts.nonzero():
        group = config.badge_groups.get(severity, config.neutral_group)
        letter = config.letters.get(severity, severity.letter)
        badges.append(f"%#{group}#{letter}:{count}")
    return " ".join(badges)


def display_path(path: str, cwd: str | None = None) -> str:
    """Return ``path`` relative to ``cwd`` when it lives below it.

    Args:
        path: Absolute buffer name reported by the host.
        cwd: Working directory of the editor.

    Returns:
        str: Relative path, or ``path`` unchanged when it is outside ``cwd``.
    """

    if not cwd or not path:
        return path
    candidate = PurePath(path)
    root = PurePath(cwd)
    if candidate == root or not candidate.is_relative_to(root):
        return path
    return candidate.relative_to(root).as_posix()


def draw_statusline(
    current_buffer_id: int,
    current_buffer_display_path: str,
    all_diagnostics: Iterable[Diagnostic],
    *,
    cursor: tuple[int, int] | None = None,
    config: StatusLineConfig | None = None,
) -> str:
    """Render the status bar.

    The layout is current-buffer badges, the neutral path segment with the
    modified and read-only flags, the ``%=`` filler, then workspace badges.
    Every call recomputes both tallies from ``all_diagnostics``.

    Args:
        current_buffer_id: Buffer shown in the focused window.
        current_buffer_display_path: Path text shown in the neutral segment.
        all_diagnostics: Every displayed diagnostic of the workspace.
        cursor: Optional ``(row, col)`` as reported by the host window cursor
            (one-based row, zero-based column); rendered as ``row:col+1``.
        config: Status line configuration.

    Returns:
        str: Host status line expression.
    """

    cfg = config or StatusLineConfig()
    current = SeverityCounts()
    workspace = SeverityCounts()
    for diagnostic in all_diagnostics:
        if not diagnostic.range.is_ordered:
            continue
        workspace.add(diagnostic.severity)
        if diagnostic.buffer_id == current_buffer_id:
            current.add(diagnostic.severity)

    current_badges = draw_badges(current, cfg)
    if current_badges:
        current_badges += " "
    rendered = (
        f"{current_badges}%#{cfg.neutral_group}#{current_buffer_display_path} {cfg.flags}"
        f"%={draw_badges(workspace, cfg)}"
    )
    if cursor is not None:
        row, col = cursor
        rendered += f"%#{cfg.neutral_group}# {row}:{col + 1}"
    return rendered


__all__ = [
    "SeverityCounts",
    "display_path",
    "draw_badges",
    "draw_statusline",
]
