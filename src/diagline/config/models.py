# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the diagnostic engine."""

from __future__ import annotations

from collections.abc import Mapping
from fnmatch import fnmatch
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.models import Diagnostic
from ..core.severity import Severity

DEFAULT_GLYPH: Final[str] = "▶"
DEFAULT_PLACEHOLDER: Final[str] = " "
DEFAULT_IGNORE_PATHS: Final[tuple[str, ...]] = ("*/.cargo/registry/*", "*/.cargo/git/*")
DEFAULT_DRAW_TRIGGERS: Final[tuple[str, ...]] = ("DiagnosticChanged", "BufEnter", "CursorMoved")


def _strip_trailing_period(value: str) -> str:
    return value.strip().removesuffix(".")


class SuppressionRule(BaseModel):
    """Drop diagnostics emitted by ``source`` that match the optional qualifiers.

    Attributes:
        source: Substring matched against the diagnostic source (e.g. ``"rustc"``).
        code: Diagnostic code that must match exactly, ignoring a trailing period.
        message: Substring that must appear in the diagnostic message, ignoring case.
        paths: Buffer path globs restricting where the rule applies.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    code: str | None = None
    message: str | None = None
    paths: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("code", mode="before")
    @classmethod
    def _coerce_code(cls, value: object) -> str | None:
        """Accept integer codes as written in TOML tables.

        Args:
            value: Raw code value supplied by the configuration source.

        Returns:
            str | None: Code rendered as a string, or ``None`` when unset.
        """

        if value is None:
            return None
        return str(value)

    def matches(self, diagnostic: Diagnostic, buffer_path: str) -> bool:
        """Return ``True`` when ``diagnostic`` is suppressed by this rule.

        Args:
            diagnostic: Diagnostic under evaluation.
            buffer_path: Path of the buffer that owns the diagnostic.

        Returns:
            bool: ``True`` when every qualifier set on the rule matches.
        """

        if diagnostic.source is None or self.source not in diagnostic.source:
            return False
        if self.code is not None:
            if diagnostic.code is None:
                return False
            if _strip_trailing_period(diagnostic.code) != _strip_trailing_period(self.code):
                return False
        if self.message is not None and self.message.casefold() not in diagnostic.message.casefold():
            return False
        if self.paths and not any(fnmatch(buffer_path, pattern) for pattern in self.paths):
            return False
        return True


class FilterConfig(BaseModel):
    """Suppression and deduplication knobs applied to every incoming batch."""

    model_config = ConfigDict(frozen=True)

    suppressions: tuple[SuppressionRule, ...] = Field(default_factory=tuple)
    ignore_paths: tuple[str, ...] = DEFAULT_IGNORE_PATHS
    dedupe: bool = True
    related_info: bool = True

    def ignores(self, buffer_path: str) -> bool:
        """Return ``True`` when diagnostics for ``buffer_path`` are never shown."""

        return any(fnmatch(buffer_path, pattern) for pattern in self.ignore_paths)


def _default_float_groups() -> dict[Severity, str]:
    return {severity: f"DiagnosticFloating{severity.group_suffix}" for severity in Severity}


class FormatterConfig(BaseModel):
    """Hover surface formatting options."""

    model_config = ConfigDict(frozen=True)

    glyph: str = DEFAULT_GLYPH
    include_range: bool = False
    severity_groups: dict[Severity, str] = Field(default_factory=_default_float_groups)


def _default_sign_glyphs() -> dict[Severity, str]:
    return {severity: severity.letter for severity in Severity if severity is not Severity.OK}


def _default_sign_groups() -> dict[str, Severity]:
    return {f"DiagnosticSign{severity.group_suffix}": severity for severity in Severity}


class StatusColumnConfig(BaseModel):
    """Gutter rendering options.

    ``glyphs`` maps severities to the character shown in the diagnostic cell;
    severities without an entry fall back to the host sign text.
    """

    model_config = ConfigDict(frozen=True)

    placeholder: str = DEFAULT_PLACEHOLDER
    glyphs: dict[Severity, str] = Field(default_factory=_default_sign_glyphs)
    diagnostic_groups: dict[str, Severity] = Field(default_factory=_default_sign_groups)
    vcs_markers: tuple[str, ...] = ("GitSigns",)
    minimal_buffer_types: tuple[str, ...] = ("grug-far",)

    @field_validator("placeholder")
    @classmethod
    def _single_cell(cls, value: str) -> str:
        """Reject placeholders that would change the gutter width.

        Args:
            value: Placeholder text supplied by configuration.

        Returns:
            str: The validated placeholder.

        Raises:
            ValueError: When the placeholder is not exactly one character.
        """

        if len(value) != 1:
            raise ValueError("placeholder must be exactly one character")
        return value


def _default_letters() -> dict[Severity, str]:
    return {severity: severity.letter for severity in Severity}


def _default_badge_groups() -> dict[Severity, str]:
    return {severity: f"DiagnosticStatusLine{severity.group_suffix}" for severity in Severity}


class StatusLineConfig(BaseModel):
    """Status bar rendering options."""

    model_config = ConfigDict(frozen=True)

    letters: dict[Severity, str] = Field(default_factory=_default_letters)
    badge_groups: dict[Severity, str] = Field(default_factory=_default_badge_groups)
    neutral_group: str = "StatusLine"
    flags: str = "%m %r"
    draw_triggers: tuple[str, ...] = DEFAULT_DRAW_TRIGGERS


class HoverConfig(BaseModel):
    """Options of the host hover window that shows formatted diagnostics."""

    model_config = ConfigDict(frozen=True)

    anchor_bias: str = "above"
    border: str = "none"
    focusable: bool = True
    header: str = ""
    prefix: str = ""
    suffix: str = ""
    source: bool = False


class DisplayConfig(BaseModel):
    """Host-side display options applied through ``vim.diagnostic.config``.

    Attributes:
        severity_sort: Let the host draw more severe diagnostics on top.
        signs: Place gutter signs; their text comes from the status column glyphs.
        underline: Underline diagnostic ranges.
        update_in_insert: Refresh diagnostics while in insert mode.
        virtual_text: Render diagnostics as end-of-line virtual text.
        hover: Hover window options.
    """

    model_config = ConfigDict(frozen=True)

    severity_sort: bool = True
    signs: bool = True
    underline: bool = True
    update_in_insert: bool = False
    virtual_text: bool = False
    hover: HoverConfig = Field(default_factory=HoverConfig)

    def to_host(self, sign_glyphs: Mapping[Severity, str]) -> dict[str, Any]:
        """Return the ``vim.diagnostic.config`` table, without the hover ``format`` callback.

        Args:
            sign_glyphs: Glyph per severity, keyed in the host table by LSP severity number.

        Returns:
            dict[str, Any]: msgpack-serialisable option table.
        """

        signs: bool | dict[str, Any] = False
        if self.signs:
            text = {
                severity.lsp_number: glyph
                for severity, glyph in sign_glyphs.items()
                if severity.lsp_number is not None
            }
            signs = {"text": text}
        return {
            "severity_sort": self.severity_sort,
            "signs": signs,
            "underline": self.underline,
            "update_in_insert": self.update_in_insert,
            "virtual_text": self.virtual_text,
            "float": self.hover.model_dump(),
        }


class EngineConfig(BaseModel):
    """Immutable configuration injected into the engine at startup."""

    model_config = ConfigDict(frozen=True)

    filter: FilterConfig = Field(default_factory=FilterConfig)
    formatter: FormatterConfig = Field(default_factory=FormatterConfig)
    statuscolumn: StatusColumnConfig = Field(default_factory=StatusColumnConfig)
    statusline: StatusLineConfig = Field(default_factory=StatusLineConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping of the configuration.

        Returns:
            dict[str, Any]: Serialised configuration suitable for TOML/JSON dumps.
        """

        return self.model_dump(mode="json")


__all__ = [
    "DEFAULT_DRAW_TRIGGERS",
    "DEFAULT_GLYPH",
    "DEFAULT_IGNORE_PATHS",
    "DEFAULT_PLACEHOLDER",
    "DisplayConfig",
    "EngineConfig",
    "FilterConfig",
    "FormatterConfig",
    "HoverConfig",
    "StatusColumnConfig",
    "StatusLineConfig",
    "SuppressionRule",
]
