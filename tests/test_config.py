# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from diagline.config.loaders import ConfigLoader, load_config
from diagline.config.models import DEFAULT_IGNORE_PATHS, EngineConfig, SuppressionRule
from diagline.core.severity import Severity
from diagline.errors import ConfigError


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_apply_without_files(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == EngineConfig()
    assert config.formatter.glyph == "▶"
    assert config.filter.ignore_paths == DEFAULT_IGNORE_PATHS
    assert config.statuscolumn.placeholder == " "
    assert config.statusline.draw_triggers == ("DiagnosticChanged", "BufEnter", "CursorMoved")


def test_pyproject_section_is_read(tmp_path: Path) -> None:
    _write(
        tmp_path / "pyproject.toml",
        """
[project]
name = "demo"

[tool.diagline.filter]
dedupe = false

[[tool.diagline.filter.suppressions]]
source = "rustc"
code = 1234
""",
    )

    config = load_config(tmp_path)

    assert config.filter.dedupe is False
    assert config.filter.suppressions == (SuppressionRule(source="rustc", code="1234"),)


def test_project_file_overrides_pyproject_and_explicit_file_wins(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[tool.diagline.formatter]\nglyph = "a"\ninclude_range = true\n')
    _write(tmp_path / ".diagline.toml", '[formatter]\nglyph = "b"\n')
    explicit = _write(tmp_path / "custom.toml", '[formatter]\nglyph = "c"\n')

    assert load_config(tmp_path).formatter.glyph == "b"
    result = ConfigLoader.for_root(tmp_path, config_path=explicit).load()

    assert result.config.formatter.glyph == "c"
    assert result.config.formatter.include_range is True
    assert result.sources[0] == "Built-in defaults"
    assert len(result.sources) == 4


def test_includes_and_environment_expansion(tmp_path: Path) -> None:
    _write(tmp_path / "shared.toml", '[statuscolumn.glyphs]\nerror = "${ERROR_GLYPH}"\n')
    _write(
        tmp_path / ".diagline.toml",
        'include = "shared.toml"\n\n[statusline]\nneutral_group = "${GROUP}"\nflags = "${MISSING} ${FLAGS:-%m}"\n',
    )

    config = load_config(tmp_path, env={"ERROR_GLYPH": "X", "GROUP": "StatusLineNC"})

    assert config.statuscolumn.glyphs[Severity.ERROR] == "X"
    assert config.statuscolumn.glyphs[Severity.WARN] == "W"
    assert config.statusline.neutral_group == "StatusLineNC"
    assert config.statusline.flags == "${MISSING} %m"


def test_circular_includes_are_rejected(tmp_path: Path) -> None:
    _write(tmp_path / "a.toml", 'include = "b.toml"\n')
    _write(tmp_path / "b.toml", 'include = "a.toml"\n')

    with pytest.raises(ConfigError, match="Circular include"):
        load_config(tmp_path, config_path=tmp_path / "a.toml")


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    _write(tmp_path / ".diagline.toml", "[formatter\nglyph = 1\n")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_invalid_values_are_reported(tmp_path: Path) -> None:
    _write(tmp_path / ".diagline.toml", '[statuscolumn]\nplaceholder = "ab"\n')

    with pytest.raises(ConfigError, match="Invalid diagline configuration"):
        load_config(tmp_path)


def test_missing_explicit_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, config_path=tmp_path / "missing.toml")


def test_loaded_config_is_immutable(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    with pytest.raises(ValidationError):
        config.formatter.glyph = "x"  # type: ignore[misc]


def test_display_section_builds_the_host_option_table(tmp_path: Path) -> None:
    _write(tmp_path / ".diagline.toml", '[display]\nunderline = false\n\n[display.hover]\nborder = "rounded"\n')

    config = load_config(tmp_path)
    table = config.display.to_host(config.statuscolumn.glyphs)

    assert table["severity_sort"] is True
    assert table["underline"] is False
    assert table["virtual_text"] is False
    assert table["update_in_insert"] is False
    assert table["signs"] == {"text": {1: "E", 2: "W", 3: "I", 4: "H"}}
    assert table["float"] == {
        "anchor_bias": "above",
        "border": "rounded",
        "focusable": True,
        "header": "",
        "prefix": "",
        "suffix": "",
        "source": False,
    }


def test_display_signs_can_be_disabled() -> None:
    config = EngineConfig.model_validate({"display": {"signs": False}})

    assert config.display.to_host(config.statuscolumn.glyphs)["signs"] is False
