# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for merging and expanding raw configuration fragments."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}")


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` recursively updated with ``override`` (neither is mutated)."""

    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Resolve ``${VAR}`` and ``${VAR:-default}`` references in every string of ``data``.

    Status expressions use ``%`` and ``#`` freely, so only the braced form is
    recognised. A reference to an unset variable without a default is kept
    verbatim.

    Args:
        data: Merged configuration table.
        env: Environment consulted for variable values.

    Returns:
        dict[str, Any]: Copy of ``data`` with the references substituted.
    """

    def substitute(match: re.Match[str]) -> str:
        fallback = match.group("default")
        return env.get(match.group("name"), match.group(0) if fallback is None else fallback)

    def walk(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_REFERENCE.sub(substitute, value)
        if isinstance(value, Mapping):
            return {key: walk(item) for key, item in value.items()}
        if isinstance(value, list):
            return [walk(item) for item in value]
        return value

    return walk(data)


__all__ = ["deep_merge", "expand_env"]
