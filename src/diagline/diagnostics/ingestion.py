# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Validate loosely typed host payloads into the closed diagline models.

Everything the host hands over (diagnostic dictionaries, extmark tuples) is
converted here. Records that cannot be converted are dropped and logged at
DEBUG level; no function in this module raises for malformed input.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Final

from pydantic import ValidationError

from ..config.models import StatusColumnConfig
from ..core.models import Diagnostic, Range, RelatedInfo, Sign, SignKind
from ..core.severity import Severity, coerce_severity

LOGGER = logging.getLogger(__name__)

DEFAULT_SEVERITY: Final[Severity] = Severity.ERROR
_EXTMARK_META_INDEX: Final[int] = 3
_EXTMARK_ROW_INDEX: Final[int] = 1
_INT_PATTERN: Final = re.compile(r"-?\d+")


def _as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INT_PATTERN.fullmatch(value.strip()):
        return int(value.strip())
    return None


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return str(value)
    return None


def _nested(mapping: Mapping[str, Any], *keys: str) -> Any:
    current: Any = mapping
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def coerce_range(raw: Mapping[str, Any]) -> Range | None:
    """Return the host ``lnum``/``col``/``end_lnum``/``end_col`` span, or ``None`` without a start."""

    start_line = _as_int(raw.get("lnum"))
    start_col = _as_int(raw.get("col"))
    if start_line is None or start_col is None:
        return None
    end_line = _as_int(raw.get("end_lnum"))
    end_col = _as_int(raw.get("end_col"))
    return Range(
        start_line=start_line,
        start_col=start_col,
        end_line=start_line if end_line is None else end_line,
        end_col=start_col if end_col is None else end_col,
    )


def _coerce_related(raw: Mapping[str, Any]) -> tuple[RelatedInfo, ...]:
    entries = _nested(raw, "user_data", "lsp", "relatedInformation")
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        return ()
    related: list[RelatedInfo] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        start = _nested(entry, "location", "range", "start")
        end = _nested(entry, "location", "range", "end")
        message = _as_text(entry.get("message"))
        if not isinstance(start, Mapping) or not isinstance(end, Mapping) or message is None:
            continue
        start_line = _as_int(start.get("line"))
        start_col = _as_int(start.get("character"))
        end_line = _as_int(end.get("line"))
        end_col = _as_int(end.get("character"))
        if start_line is None or start_col is None or end_line is None or end_col is None:
            continue
        related.append(
            RelatedInfo(
                range=Range(start_line=start_line, start_col=start_col, end_line=end_line, end_col=end_col),
                message=message,
            )
        )
    return tuple(related)


def coerce_diagnostic(
    raw: object,
    *,
    buffer_id: int,
    namespace_id: int,
) -> Diagnostic | None:
    """Convert one host diagnostic dictionary into a :class:`Diagnostic`.

    Source and code prefer the ``user_data.lsp`` values when the language
    client provides them; the long rendered message of servers such as
    rust-analyzer is kept in :attr:`Diagnostic.rendered`.

    Args:
        raw: Host payload, expected to be a mapping with ``lnum``/``col`` keys.
        buffer_id: Buffer owning the batch.
        namespace_id: Namespace owning the batch.

    Returns:
        Diagnostic | None: Converted diagnostic, or ``None`` when the payload is
        unusable (not a mapping, missing position, unrecognised severity).
    """

    if not isinstance(raw, Mapping):
        LOGGER.debug("dropping non-mapping diagnostic payload: %r", raw)
        return None
    diag_range = coerce_range(raw)
    if diag_range is None:
        LOGGER.debug("dropping diagnostic without a usable position: %r", raw)
        return None
    raw_severity = raw.get("severity")
    severity = DEFAULT_SEVERITY if raw_severity is None else coerce_severity(raw_severity)
    if severity is None:
        LOGGER.debug("dropping diagnostic with unrecognised severity %r", raw_severity)
        return None

    lsp = _nested(raw, "user_data", "lsp")
    lsp_source = _as_text(lsp.get("source")) if isinstance(lsp, Mapping) else None
    lsp_code = _as_text(lsp.get("code")) if isinstance(lsp, Mapping) else None
    rendered = _as_text(_nested(raw, "user_data", "lsp", "data", "rendered"))

    try:
        return Diagnostic(
            buffer_id=buffer_id,
            namespace_id=namespace_id,
            range=diag_range,
            severity=severity,
            message=_as_text(raw.get("message")) or "",
            source=lsp_source or _as_text(raw.get("source")),
            code=lsp_code or _as_text(raw.get("code")),
            rendered=rendered,
            related=_coerce_related(raw),
            payload=dict(raw),
        )
    except ValidationError as exc:
        LOGGER.debug("dropping invalid diagnostic %r: %s", raw, exc)
        return None


def coerce_diagnostics(
    raws: Iterable[object],
    *,
    buffer_id: int,
    namespace_id: int,
) -> list[Diagnostic]:
    """Convert a host batch, dropping the entries :func:`coerce_diagnostic` rejects."""

    converted: list[Diagnostic] = []
    for raw in raws:
        diagnostic = coerce_diagnostic(raw, buffer_id=buffer_id, namespace_id=namespace_id)
        if diagnostic is not None:
            converted.append(diagnostic)
    return converted


def classify_sign_group(highlight_group: str, config: StatusColumnConfig) -> tuple[SignKind, Severity | None] | None:
    """Map a sign highlight group onto a :class:`SignKind` and severity.

    Args:
        highlight_group: Host highlight group of the sign (``DiagnosticSignWarn``).
        config: Status column configuration providing group mappings.

    Returns:
        tuple[SignKind, Severity | None] | None: Kind and severity, or ``None``
        when the group belongs to neither family.
    """

    severity = config.diagnostic_groups.get(highlight_group)
    if severity is not None:
        return SignKind.DIAGNOSTIC, severity
    if any(marker in highlight_group for marker in config.vcs_markers):
        return SignKind.VERSION_CONTROL, None
    return None


def coerce_sign(raw: object, config: StatusColumnConfig, *, buffer_id: int = 0) -> Sign | None:
    """Convert a host extmark (``[id, row, col, details]``) into a :class:`Sign`.

    Mappings carrying ``sign_hl_group`` directly are accepted as well.

    Args:
        raw: Extmark tuple/list or details mapping.
        config: Status column configuration used for classification.
        buffer_id: Buffer the extmark belongs to.

    Returns:
        Sign | None: Converted sign, or ``None`` for unrelated or malformed marks.
    """

    line = 0
    details: object = raw
    if isinstance(raw, Sequence) and not isinstance(raw, str):
        if len(raw) <= _EXTMARK_META_INDEX:
            return None
        line = _as_int(raw[_EXTMARK_ROW_INDEX]) or 0
        details = raw[_EXTMARK_META_INDEX]
    if not isinstance(details, Mapping):
        return None
    group = _as_text(details.get("sign_hl_group"))
    if not group:
        return None
    classified = classify_sign_group(group, config)
    if classified is None:
        return None
    kind, severity = classified
    return Sign(
        buffer_id=buffer_id,
        line=line,
        highlight_group=group,
        text=_as_text(details.get("sign_text")) or "",
        kind=kind,
        severity=severity,
        priority=_as_int(details.get("priority")) or 0,
    )


def coerce_signs(raws: Iterable[object], config: StatusColumnConfig, *, buffer_id: int = 0) -> list[Sign]:
    """Convert every extmark in ``raws``, keeping input order."""

    signs: list[Sign] = []
    for raw in raws:
        sign = coerce_sign(raw, config, buffer_id=buffer_id)
        if sign is not None:
            signs.append(sign)
    return signs


__all__ = [
    "DEFAULT_SEVERITY",
    "classify_sign_group",
    "coerce_diagnostic",
    "coerce_diagnostics",
    "coerce_range",
    "coerce_sign",
    "coerce_signs",
]
