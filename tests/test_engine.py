# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the engine context object and the set-diagnostics hook."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from diagline.config.models import EngineConfig, FilterConfig, SuppressionRule
from diagline.core.severity import Severity
from diagline.engine import DiagnosticEngine
from diagline.hooks import is_wrapped, wrap_set_diagnostics

HostFactory = Callable[..., dict[str, Any]]


class RecordingSet:
    """Stand-in for the host entry point recording every delegated call."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int, list[dict[str, Any]], Mapping[str, Any] | None]] = []

    def __call__(
        self,
        namespace_id: int,
        buffer_id: int,
        diagnostics: Sequence[Mapping[str, Any]],
        display_opts: Mapping[str, Any] | None = None,
        /,
    ) -> str:
        self.calls.append((namespace_id, buffer_id, [dict(item) for item in diagnostics], display_opts))
        return "published"


def test_ingest_filters_sorts_and_stores(make_host_diagnostic: HostFactory) -> None:
    engine = DiagnosticEngine()
    batch = [
        make_host_diagnostic(message="warn", severity=2, lnum=1),
        make_host_diagnostic(message="error", severity=1, lnum=4),
        make_host_diagnostic(message="broken", lnum=5, end_lnum=3),
    ]

    kept = engine.ingest(3, 7, "/work/a.py", batch)

    assert [diagnostic.message for diagnostic in kept] == ["error", "warn"]
    assert engine.store.get((3, 7)) == tuple(kept)


def test_ingest_replaces_previous_batch(make_host_diagnostic: HostFactory) -> None:
    engine = DiagnosticEngine()
    engine.ingest(1, 0, "/work/a.py", [make_host_diagnostic(message="first")])

    engine.ingest(1, 0, "/work/a.py", [make_host_diagnostic(message="second")])

    assert [diagnostic.message for diagnostic in engine.store.workspace()] == ["second"]


def test_ingest_treats_non_sequences_as_empty(make_host_diagnostic: HostFactory) -> None:
    engine = DiagnosticEngine()
    engine.ingest(1, 0, "/work/a.py", [make_host_diagnostic()])

    assert engine.ingest(1, 0, "/work/a.py", None) == []
    assert engine.ingest(1, 0, "/work/a.py", "junk") == []
    assert len(engine.store) == 0


def test_engine_applies_configured_suppressions(make_host_diagnostic: HostFactory) -> None:
    config = EngineConfig(filter=FilterConfig(suppressions=(SuppressionRule(source="typos"),)))
    engine = DiagnosticEngine(config)

    kept = engine.ingest(1, 0, "/work/a.py", [make_host_diagnostic(source="typos"), make_host_diagnostic(lnum=1)])

    assert len(kept) == 1
    assert kept[0].source is None


def test_buffer_close_and_shutdown(make_host_diagnostic: HostFactory) -> None:
    engine = DiagnosticEngine()
    engine.ingest(1, 0, "/work/a.py", [make_host_diagnostic()])
    engine.ingest(2, 0, "/work/b.py", [make_host_diagnostic()])

    engine.on_buffer_closed(1)

    assert engine.store.keys() == [(2, 0)]
    assert engine.draw_statusline(2, "b.py") == (
        "%#DiagnosticStatusLineError#E:1 %#StatusLine#b.py %m %r%=%#DiagnosticStatusLineError#E:1"
    )

    engine.shutdown()

    assert engine.draw_statusline(2, "b.py") == "%#StatusLine#b.py %m %r%="


def test_engine_renders_raw_extmarks() -> None:
    engine = DiagnosticEngine()
    marks = [
        [1, 0, 0, {"sign_hl_group": "GitSignsAdd", "sign_text": "+ "}],
        [2, 0, 0, {"sign_hl_group": "DiagnosticSignInfo", "sign_text": "I"}],
        [3, 0, 0, {"sign_hl_group": "Unrelated", "sign_text": "?"}],
    ]

    assert engine.draw_statuscolumn(marks, line_number=7) == "%#DiagnosticSignInfo#I%*%#GitSignsAdd#+%*%=% 7 "


def test_engine_format_accepts_models_and_payloads(make_host_diagnostic: HostFactory) -> None:
    engine = DiagnosticEngine()
    raw = make_host_diagnostic(message="unused var.\n", severity="warning", source="rustc", code="E0001.")
    [diagnostic] = engine.ingest(1, 0, "/work/main.rs", [raw])

    assert diagnostic.severity is Severity.WARN
    assert engine.format(diagnostic) == "▶ unused var [rustc: E0001]"
    assert engine.format(raw) == "▶ unused var [rustc: E0001]"
    assert engine.format(raw, include_range=True) == "▶ unused var [rustc: E0001] @ 0:0;0:1"


def test_wrapped_entry_point_delegates_processed_batch(make_host_diagnostic: HostFactory) -> None:
    engine = DiagnosticEngine()
    original = RecordingSet()
    wrapped = wrap_set_diagnostics(original, engine, lambda buffer_id: f"/work/{buffer_id}.py")
    batch = [
        make_host_diagnostic(message="hint", severity=4),
        make_host_diagnostic(message="error", severity=1, lnum=2, user_data={"lsp": {"code": "X"}}),
        make_host_diagnostic(message="error", severity=2, lnum=2, user_data={"lsp": {"code": "X"}}),
    ]

    result = wrapped(5, 9, batch, {"virtual_text": False})

    assert result == "published"
    [(namespace_id, buffer_id, published, opts)] = original.calls
    assert (namespace_id, buffer_id, opts) == (5, 9, {"virtual_text": False})
    assert [item["message"] for item in published] == ["error", "hint"]
    assert published[0]["severity"] == 1
    assert published[0]["user_data"] == {"lsp": {"code": "X"}}
    assert [diagnostic.message for diagnostic in engine.store.get((9, 5))] == ["error", "hint"]


def test_ignored_buffers_publish_an_empty_batch(make_host_diagnostic: HostFactory) -> None:
    engine = DiagnosticEngine()
    original = RecordingSet()
    wrapped = wrap_set_diagnostics(original, engine, lambda _: "/home/dev/.cargo/registry/src/lib.rs")

    wrapped(1, 1, [make_host_diagnostic()])

    assert original.calls == [(1, 1, [], None)]


def test_wrapping_is_idempotent() -> None:
    engine = DiagnosticEngine()
    original = RecordingSet()

    wrapped = wrap_set_diagnostics(original, engine, lambda _: "")

    assert is_wrapped(wrapped)
    assert not is_wrapped(original)
    assert wrap_set_diagnostics(wrapped, engine, lambda _: "") is wrapped


def test_diagnostics_reset_clears_stale_badges(make_host_diagnostic: HostFactory) -> None:
    engine = DiagnosticEngine()
    engine.ingest(1, 0, "/work/a.py", [make_host_diagnostic()])
    engine.ingest(1, 2, "/work/a.py", [make_host_diagnostic(severity=2)])

    engine.on_diagnostics_reset(0, 1)

    assert engine.draw_statusline(1, "a.py") == (
        "%#DiagnosticStatusLineWarn#W:1 %#StatusLine#a.py %m %r%=%#DiagnosticStatusLineWarn#W:1"
    )

    engine.on_diagnostics_reset(buffer_id=1)

    assert engine.draw_statusline(1, "a.py") == "%#StatusLine#a.py %m %r%="
