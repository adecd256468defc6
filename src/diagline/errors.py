# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the diagline package."""

from __future__ import annotations


class DiaglineError(Exception):
    """Base class for errors raised by diagline."""


class ConfigError(DiaglineError):
    """Raised when configuration input is invalid."""


class HostError(DiaglineError):
    """Raised when the editor host cannot be reached or misbehaves."""


__all__ = ["ConfigError", "DiaglineError", "HostError"]
