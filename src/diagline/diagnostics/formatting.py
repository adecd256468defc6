# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Single-line rendering of diagnostics for the hover surface."""

from __future__ import annotations

from collections.abc import Mapping

from ..config.models import FormatterConfig
from ..core.models import Diagnostic
from ..core.severity import LEAST_SEVERE
from .ingestion import coerce_diagnostic, coerce_range


def normalize_text(text: str | None) -> str:
    """Collapse line breaks to ``", "`` and strip one trailing period.

    Args:
        text: Raw message, source or code text; ``None`` is treated as empty.

    Returns:
        str: Single-line text without surrounding whitespace.
    """

    if not text:
        return ""
    parts = (line.strip() for line in text.splitlines())
    collapsed = ", ".join(part for part in parts if part)
    return collapsed.removesuffix(".")


def source_suffix(source: str | None, code: str | None) -> str:
    """Return ``[source: code]``, ``[source]``, ``[code]`` or an empty string."""

    clean_source = normalize_text(source)
    clean_code = normalize_text(code)
    if clean_source and clean_code:
        return f"[{clean_source}: {clean_code}]"
    if clean_source or clean_code:
        return f"[{clean_source or clean_code}]"
    return ""


def format_diagnostic(
    diagnostic: Diagnostic,
    include_range: bool = False,
    *,
    config: FormatterConfig | None = None,
) -> str:
    """Render ``diagnostic`` as one human-readable line.

    The rendered server message is preferred over the plain message when the
    language server provides one.

    Args:
        diagnostic: Diagnostic to render.
        include_range: Append the zero-based ``@ line:col;line:col`` position.
        config: Formatter configuration supplying the leading glyph.

    Returns:
        str: Formatted line such as ``"▶ unused var [rustc: E0001]"``.
    """

    cfg = config or FormatterConfig()
    pieces = [
        cfg.glyph,
        normalize_text(diagnostic.rendered or diagnostic.message),
        source_suffix(diagnostic.source, diagnostic.code),
    ]
    if include_range:
        pieces.append(f"@ {diagnostic.range.describe()}")
    return " ".join(piece for piece in pieces if piece)


def format_host_diagnostic(
    raw: object,
    include_range: bool = False,
    *,
    config: FormatterConfig | None = None,
) -> str:
    """Render a raw host diagnostic, as handed to the hover window callback.

    Payloads that cannot be converted into a :class:`Diagnostic`, such as one
    with an unrecognised severity, still render their message, source and
    code, plus the position when the payload carries one.

    Args:
        raw: Host diagnostic mapping.
        include_range: Append the position suffix when the position is known.
        config: Formatter configuration.

    Returns:
        str: Formatted line; never raises.
    """

    cfg = config or FormatterConfig()
    diagnostic = coerce_diagnostic(raw, buffer_id=0, namespace_id=0)
    if diagnostic is not None:
        return format_diagnostic(diagnostic, include_range, config=cfg)
    fields = raw if isinstance(raw, Mapping) else {}
    pieces = [
        cfg.glyph,
        normalize_text(_text_or_none(fields.get("message"))),
        source_suffix(_text_or_none(fields.get("source")), _text_or_none(fields.get("code"))),
    ]
    position = coerce_range(fields) if include_range else None
    if position is not None:
        pieces.append(f"@ {position.describe()}")
    return " ".join(piece for piece in pieces if piece)


def _text_or_none(value: object) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    return str(value)


def severity_style(diagnostic: Diagnostic, *, config: FormatterConfig | None = None) -> str:
    """Return the hover highlight group, styling a missing severity as the least severe tier."""

    cfg = config or FormatterConfig()
    severity = diagnostic.severity or LEAST_SEVERE
    return cfg.severity_groups.get(severity, "")


__all__ = [
    "format_diagnostic",
    "format_host_diagnostic",
    "normalize_text",
    "severity_style",
    "source_suffix",
]
