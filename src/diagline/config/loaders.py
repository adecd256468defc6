# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration sources (defaults, TOML, pyproject) and the layered loader."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigError
from .models import EngineConfig
from .utils import deep_merge, expand_env

LOGGER = logging.getLogger(__name__)

DEFAULT_INCLUDE_KEY: Final[str] = "include"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "diagline"
PROJECT_CONFIG_NAME: Final[str] = ".diagline.toml"
PYPROJECT_NAME: Final[str] = "pyproject.toml"


@runtime_checkable
class ConfigSource(Protocol):
    """Provide a raw configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the configuration fragment exposed by the source."""

        raise NotImplementedError

    def describe(self) -> str:
        """Return a human-readable description of the source."""

        raise NotImplementedError


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return EngineConfig().to_dict()

    def describe(self) -> str:
        return "Built-in defaults"


class TomlConfigSource:
    """Load configuration data from a TOML document with include support."""

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        include_key: str = DEFAULT_INCLUDE_KEY,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._root_path = path
        self.name = name or str(path)
        self._include_key = include_key
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        return self._load(self._root_path, ())

    def _load(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        if not path.exists():
            return {}
        resolved = path.resolve()
        if resolved in stack:
            include_chain = " -> ".join(str(entry) for entry in (*stack, resolved))
            raise ConfigError(f"Circular include detected: {include_chain}")
        try:
            with resolved.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
        document: dict[str, Any] = dict(data)
        includes = document.pop(self._include_key, None)
        merged: dict[str, Any] = {}
        for include_path in self._coerce_includes(includes, resolved.parent):
            fragment = self._load(include_path, (*stack, resolved))
            merged = deep_merge(merged, fragment)
        merged = deep_merge(merged, document)
        return expand_env(merged, self._env)

    def _coerce_includes(self, raw: Any, base_dir: Path) -> Iterable[Path]:
        if raw is None:
            return []
        if isinstance(raw, str):
            return [self._resolve_path(Path(raw), base_dir)]
        if isinstance(raw, list):
            return [self._resolve_path(Path(item), base_dir) for item in raw]
        raise ConfigError(f"Unsupported include declaration: {raw!r}")

    @staticmethod
    def _resolve_path(path: Path, base_dir: Path) -> Path:
        return path if path.is_absolute() else (base_dir / path)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.diagline]`` within ``pyproject.toml``."""

    def __init__(self, path: Path, *, env: Mapping[str, str] | None = None) -> None:
        super().__init__(path, name=str(path), env=env)

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


class ConfigLoadResult(BaseModel):
    """Container bundling a resolved config with the sources that shaped it."""

    model_config = ConfigDict(frozen=True)

    config: EngineConfig
    sources: tuple[str, ...] = Field(default_factory=tuple)


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        """Initialise a loader over ``sources`` ordered from lowest to highest precedence.

        Args:
            sources: Ordered collection of configuration sources.

        Raises:
            ValueError: If ``sources`` is empty.
        """

        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        project_root: Path,
        *,
        config_path: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ConfigLoader:
        """Build the standard source chain for ``project_root``.

        Args:
            project_root: Directory searched for ``pyproject.toml`` and ``.diagline.toml``.
            config_path: Optional explicit configuration file with the highest precedence.
            env: Environment used for ``${VAR}`` expansion; defaults to ``os.environ``.

        Returns:
            ConfigLoader: Loader applying defaults, pyproject, project file and explicit file.
        """

        sources: list[ConfigSource] = [
            DefaultConfigSource(),
            PyProjectConfigSource(project_root / PYPROJECT_NAME, env=env),
            TomlConfigSource(project_root / PROJECT_CONFIG_NAME, env=env),
        ]
        if config_path is not None:
            if not config_path.is_file():
                raise ConfigError(f"Configuration file not found: {config_path}")
            sources.append(TomlConfigSource(config_path, env=env))
        return cls(sources)

    def load(self) -> ConfigLoadResult:
        """Merge every source and validate the result.

        Returns:
            ConfigLoadResult: Validated configuration plus the contributing sources.

        Raises:
            ConfigError: If a source is malformed or the merged data fails validation.
        """

        merged: dict[str, Any] = {}
        applied: list[str] = []
        for source in self._sources:
            fragment = source.load()
            if not isinstance(fragment, Mapping):
                raise ConfigError(f"{source.describe()} must be a table")
            if not fragment:
                continue
            LOGGER.debug("applying configuration from %s", source.describe())
            merged = deep_merge(merged, fragment)
            applied.append(source.describe())
        try:
            config = EngineConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid diagline configuration: {exc}") from exc
        return ConfigLoadResult(config=config, sources=tuple(applied))


def load_config(
    project_root: Path,
    *,
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> EngineConfig:
    """Return the effective configuration for ``project_root``.

    Args:
        project_root: Directory anchoring configuration discovery.
        config_path: Optional explicit configuration file.
        env: Environment used for variable expansion.

    Returns:
        EngineConfig: Validated, immutable configuration.
    """

    return ConfigLoader.for_root(project_root, config_path=config_path, env=env).load().config


__all__ = [
    "ConfigLoadResult",
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "PROJECT_CONFIG_NAME",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_config",
]
