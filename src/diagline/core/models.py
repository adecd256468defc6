# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the diagline package."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .severity import Severity


class Range(BaseModel):
    """Zero-based span of text covered by a diagnostic."""

    model_config = ConfigDict(frozen=True)

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @property
    def is_ordered(self) -> bool:
        """Return whether the range satisfies the start-before-end invariant.

        Returns:
            bool: ``True`` when every coordinate is non-negative,
            ``start_line <= end_line`` and, for single-line ranges,
            ``start_col <= end_col``.
        """

        if min(self.start_line, self.start_col, self.end_line, self.end_col) < 0:
            return False
        if self.start_line != self.end_line:
            return self.start_line < self.end_line
        return self.start_col <= self.end_col

    def describe(self) -> str:
        """Return the ``start_line:start_col;end_line:end_col`` position string."""

        return f"{self.start_line}:{self.start_col};{self.end_line}:{self.end_col}"


class RelatedInfo(BaseModel):
    """Location and message of an LSP ``relatedInformation`` entry."""

    model_config = ConfigDict(frozen=True)

    range: Range
    message: str


class Diagnostic(BaseModel):
    """Structured issue report attached to a span of text in a buffer.

    ``payload`` keeps the untouched host dictionary so the batch can be handed
    back to the host without losing fields diagline does not model. It is
    excluded from comparisons and serialisation.
    """

    model_config = ConfigDict(frozen=True)

    buffer_id: int
    namespace_id: int
    range: Range
    severity: Severity | None = None
    message: str = ""
    source: str | None = None
    code: str | None = None
    rendered: str | None = None
    related: tuple[RelatedInfo, ...] = Field(default_factory=tuple)
    payload: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def identity(self) -> tuple[object, ...]:
        """Return the tuple of modelled fields used for equality and hashing."""

        return (
            self.buffer_id,
            self.namespace_id,
            self.range,
            self.severity,
            self.message,
            self.source,
            self.code,
            self.rendered,
            self.related,
        )

    def to_host(self) -> dict[str, Any]:
        """Return the host dictionary representation of the diagnostic.

        Returns:
            dict[str, Any]: Original host payload updated with the normalised
            position, severity, message, source and code fields.
        """

        host: dict[str, Any] = dict(self.payload)
        host.update(
            bufnr=self.buffer_id,
            namespace=self.namespace_id,
            lnum=self.range.start_line,
            col=self.range.start_col,
            end_lnum=self.range.end_line,
            end_col=self.range.end_col,
            message=self.message,
        )
        if self.severity is not None and self.severity.lsp_number is not None:
            host["severity"] = self.severity.lsp_number
        if self.source is not None:
            host["source"] = self.source
        if self.code is not None:
            host["code"] = self.code
        return host


class SignKind(str, Enum):
    """Enumerate the gutter sign families rendered by the status column."""

    VERSION_CONTROL = "version_control"
    DIAGNOSTIC = "diagnostic"


class Sign(BaseModel):
    """Read-only projection of a host gutter sign for one buffer line."""

    model_config = ConfigDict(frozen=True)

    buffer_id: int = 0
    line: int = 0
    highlight_group: str
    text: str = ""
    kind: SignKind
    severity: Severity | None = None
    priority: int = 0

    @model_validator(mode="after")
    def _check_kind(self) -> Sign:
        """Ensure diagnostic signs carry a severity and VCS signs do not.

        Returns:
            Sign: The validated sign.

        Raises:
            ValueError: When ``severity`` does not agree with ``kind``.
        """

        if self.kind is SignKind.DIAGNOSTIC and self.severity is None:
            raise ValueError("diagnostic signs require a severity")
        if self.kind is SignKind.VERSION_CONTROL and self.severity is not None:
            raise ValueError("version-control signs cannot carry a severity")
        return self


SnapshotKey: TypeAlias = tuple[int, int]


__all__ = [
    "Diagnostic",
    "Range",
    "RelatedInfo",
    "Sign",
    "SignKind",
    "SnapshotKey",
]
