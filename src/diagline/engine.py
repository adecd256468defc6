# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Engine context object tying configuration, pipeline, store and renderers together."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .config.models import EngineConfig
from .core.models import Diagnostic, Sign
from .diagnostics.formatting import format_diagnostic, format_host_diagnostic, severity_style
from .diagnostics.ingestion import coerce_sign
from .diagnostics.pipeline import BatchRequest, DiagnosticPipeline
from .rendering.statuscolumn import draw_statuscolumn
from .rendering.statusline import draw_statusline
from .store import DiagnosticStore

LOGGER = logging.getLogger(__name__)


class DiagnosticEngine:
    """Single context object created at startup and shared by every host callback.

    All operations run on the caller's thread and never raise for malformed
    host input; unusable records are dropped and logged at DEBUG level.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        store: DiagnosticStore | None = None,
        pipeline: DiagnosticPipeline | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._store = store if store is not None else DiagnosticStore()
        self._pipeline = pipeline or DiagnosticPipeline()

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def store(self) -> DiagnosticStore:
        return self._store

    def ingest(
        self,
        buffer_id: int,
        namespace_id: int,
        buffer_path: str,
        raw_diagnostics: object,
    ) -> list[Diagnostic]:
        """Process one host batch and replace the snapshot it addresses.

        Args:
            buffer_id: Buffer the batch belongs to.
            namespace_id: Namespace that published the batch.
            buffer_path: File path of the buffer.
            raw_diagnostics: Host diagnostic payloads; anything other than a
                sequence is treated as an empty batch.

        Returns:
            list[Diagnostic]: Retained diagnostics in display order.
        """

        if not isinstance(raw_diagnostics, Sequence) or isinstance(raw_diagnostics, str | bytes):
            LOGGER.debug("treating non-sequence batch %r as empty", type(raw_diagnostics).__name__)
            raw_diagnostics = ()
        request = BatchRequest(
            buffer_id=buffer_id,
            namespace_id=namespace_id,
            buffer_path=buffer_path or "",
            candidates=raw_diagnostics,
            config=self._config.filter,
        )
        diagnostics = self._pipeline.run(request)
        self._store.replace(request.key, diagnostics)
        return diagnostics

    def on_buffer_closed(self, buffer_id: int) -> None:
        """Forget every snapshot held for a buffer the host has closed."""

        self._store.drop_buffer(buffer_id)

    def on_diagnostics_reset(self, namespace_id: int | None = None, buffer_id: int | None = None) -> None:
        """Forget the snapshots a host diagnostic reset cleared.

        Args:
            namespace_id: Namespace that was reset, or ``None`` for every namespace.
            buffer_id: Buffer that was reset, or ``None`` for every buffer.
        """

        self._store.reset(namespace_id, buffer_id)

    def format(self, diagnostic: Diagnostic | object, include_range: bool | None = None) -> str:
        """Format a model or raw host diagnostic for the hover surface.

        Args:
            diagnostic: :class:`Diagnostic` or host payload.
            include_range: Override of the configured ``include_range`` flag.

        Returns:
            str: Single formatted line.
        """

        with_range = self._config.formatter.include_range if include_range is None else include_range
        if isinstance(diagnostic, Diagnostic):
            return format_diagnostic(diagnostic, with_range, config=self._config.formatter)
        return format_host_diagnostic(diagnostic, with_range, config=self._config.formatter)

    def style(self, diagnostic: Diagnostic) -> str:
        """Return the hover highlight group of ``diagnostic``."""

        return severity_style(diagnostic, config=self._config.formatter)

    def draw_statuscolumn(
        self,
        signs: Iterable[Sign | object],
        *,
        buffer_id: int = 0,
        line_number: int | str | None = None,
        buffer_type: str | None = None,
    ) -> str:
        """Render the gutter for one line from models or raw host extmarks."""

        cfg = self._config.statuscolumn
        converted: list[Sign] = []
        for sign in signs or ():
            if isinstance(sign, Sign):
                converted.append(sign)
                continue
            coerced = coerce_sign(sign, cfg, buffer_id=buffer_id)
            if coerced is not None:
                converted.append(coerced)
        return draw_statuscolumn(converted, line_number=line_number, buffer_type=buffer_type, config=cfg)

    def draw_statusline(
        self,
        current_buffer_id: int,
        current_buffer_display_path: str,
        *,
        cursor: tuple[int, int] | None = None,
    ) -> str:
        """Render the status bar from the current snapshot of the whole workspace."""

        return draw_statusline(
            current_buffer_id,
            current_buffer_display_path,
            self._store.workspace(),
            cursor=cursor,
            config=self._config.statusline,
        )

    def shutdown(self) -> None:
        """Tear down the snapshot store."""

        LOGGER.debug("shutting down engine with %d snapshots", len(self._store))
        self._store.clear()


__all__ = ["DiagnosticEngine"]
