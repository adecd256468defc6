# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Closed set of diagnostic urgency tiers, declared from most to least urgent."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    HINT = "hint"
    OK = "ok"

    @property
    def rank(self) -> int:
        """Return the position of the severity in the urgency order.

        Returns:
            int: ``0`` for :attr:`ERROR` up to ``4`` for :attr:`OK`.
        """

        return _SEVERITY_ORDER.index(self)

    @property
    def letter(self) -> str:
        """Return the single character used by status surfaces.

        Returns:
            str: Upper-case letter such as ``"E"`` for :attr:`ERROR`.
        """

        return self.value[0].upper()

    @property
    def lsp_number(self) -> int | None:
        """Return the LSP ``DiagnosticSeverity`` number, ``None`` for :attr:`OK`."""

        return _LSP_NUMBERS.get(self)

    @property
    def group_suffix(self) -> str:
        """Return the capitalised name used in host highlight groups (``Error``)."""

        return self.value.capitalize()


_SEVERITY_ORDER: Final[tuple[Severity, ...]] = tuple(Severity)
LEAST_SEVERE: Final[Severity] = _SEVERITY_ORDER[-1]

_LSP_NUMBERS: Final[dict[Severity, int]] = {
    Severity.ERROR: 1,
    Severity.WARN: 2,
    Severity.INFO: 3,
    Severity.HINT: 4,
}
_FROM_LSP_NUMBER: Final[dict[int, Severity]] = {number: sev for sev, number in _LSP_NUMBERS.items()}

_ALIASES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "err": Severity.ERROR,
    "e": Severity.ERROR,
    "warn": Severity.WARN,
    "warning": Severity.WARN,
    "w": Severity.WARN,
    "info": Severity.INFO,
    "information": Severity.INFO,
    "i": Severity.INFO,
    "hint": Severity.HINT,
    "h": Severity.HINT,
    "ok": Severity.OK,
    "o": Severity.OK,
}


def coerce_severity(value: object) -> Severity | None:
    """Convert a loosely typed host severity into :class:`Severity`.

    Args:
        value: Severity value supplied by the host. Accepts enum members, LSP
            numbers (``1``-``4``), numeric strings and textual aliases such as
            ``"warning"`` or ``"e"``.

    Returns:
        Severity | None: Matching severity, or ``None`` when the value is not
        recognised and the owning record should be dropped.
    """

    if isinstance(value, Severity):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return _FROM_LSP_NUMBER.get(value)
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised.isdecimal():
            return _FROM_LSP_NUMBER.get(int(normalised))
        return _ALIASES.get(normalised)
    return None


def severity_rank(severity: Severity | None) -> int:
    """Return the ordering rank of ``severity``, treating ``None`` as least severe.

    Args:
        severity: Severity to rank, possibly missing.

    Returns:
        int: Rank where lower numbers are more urgent.
    """

    return (severity or LEAST_SEVERE).rank


__all__ = [
    "LEAST_SEVERE",
    "Severity",
    "coerce_severity",
    "severity_rank",
]
