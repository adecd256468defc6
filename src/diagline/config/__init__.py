# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loading helpers."""

from __future__ import annotations

from ..errors import ConfigError
from .loaders import ConfigLoader, ConfigLoadResult, load_config
from .models import (
    DisplayConfig,
    EngineConfig,
    FilterConfig,
    FormatterConfig,
    HoverConfig,
    StatusColumnConfig,
    StatusLineConfig,
    SuppressionRule,
)

__all__ = [
    "ConfigError",
    "ConfigLoadResult",
    "ConfigLoader",
    "DisplayConfig",
    "EngineConfig",
    "FilterConfig",
    "FormatterConfig",
    "HoverConfig",
    "StatusColumnConfig",
    "StatusLineConfig",
    "SuppressionRule",
    "load_config",
]
