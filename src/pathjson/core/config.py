# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
# Purpose: Defines the config unit so this responsibility stays isolated, testable, and easy to evolve.

"""
Configuration loading utilities for pathjson.

Conventions:
- Decoder config lives under the "decoder" key of a JSON file named by
  PATHJSON_CONFIG (or passed explicitly).
- Environment variables override JSON values.
- JSON values can reference environment variables using ${VAR_NAME} placeholders.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

# Default payload limit of the host the component was first written for.
DEFAULT_MAX_BODY_BYTES = 256 * 1024

_TRUTHY = ("1", "true", "yes", "on")


class DecoderSettings(BaseModel):
    """Settings shared by every ``JsonBody`` dependency."""

    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, ge=0)
    strict: bool = True


_ENV_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)\}")


def _interpolate_env(value: Any) -> Any:
    """Interpolate ${VAR} placeholders within strings using environment variables.

    Non-string types are returned unchanged.
    """
    if isinstance(value, str):

        def replace(match: re.Match[str]) -> str:
            var = match.group(1)
            return os.getenv(var, match.group(0))  # leave placeholder if unset

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(v) for v in value]
    return value


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Deeply merge mapping 'override' into dict 'base'. Returns new dict."""
    result: Dict[str, Any] = dict(base)
    for k, v in override.items():
        if isinstance(v, Mapping) and isinstance(result.get(k), Mapping):
            result[k] = _deep_merge(dict(result[k]), v)  # type: ignore[index]
        else:
            result[k] = v
    return result


def load_json_file(path: os.PathLike[str] | str | None) -> Dict[str, Any]:
    """Load JSON from path if it exists; return empty dict if missing.

    Raises ValueError for malformed JSON.
    """
    if path is None:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON at {p}: {e}") from e


def _env_overrides_for_decoder() -> Dict[str, Any]:
    """Collect PATHJSON_* environment variables.

    Supported variables:
    - PATHJSON_MAX_BODY_BYTES -> max_body_bytes (int; 0 disables the limit)
    - PATHJSON_STRICT -> strict
    """
    result: Dict[str, Any] = {}
    max_body = os.getenv("PATHJSON_MAX_BODY_BYTES")
    strict = os.getenv("PATHJSON_STRICT")

    if max_body is not None:
        try:
            result["max_body_bytes"] = int(max_body)
        except ValueError:
            raise ValueError(
                f"PATHJSON_MAX_BODY_BYTES must be an integer, got {max_body!r}"
            )
    if strict is not None:
        result["strict"] = strict.strip().lower() in _TRUTHY
    return result


def load_decoder_config(
    path: os.PathLike[str] | str | None = None,
    defaults: Optional[Mapping[str, Any]] = None,
) -> DecoderSettings:
    """Load decoder configuration applying precedence and interpolation.

    Precedence: env overrides > JSON file > defaults
    """
    if path is None:
        path = os.getenv("PATHJSON_CONFIG")
    defaults = dict(defaults or {})
    json_config = _interpolate_env(load_json_file(path)).get("decoder") or {}
    merged = _deep_merge(defaults, json_config)
    merged = _deep_merge(merged, _env_overrides_for_decoder())
    return DecoderSettings.model_validate(merged)
