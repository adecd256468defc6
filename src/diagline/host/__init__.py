# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Editor host integration."""

from __future__ import annotations

from .protocols import BufferPathResolver, SetDiagnostics

__all__ = ["BufferPathResolver", "SetDiagnostics"]
