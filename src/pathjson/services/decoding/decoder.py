# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Decode a JSON byte buffer into a typed value, locating any failure.

Parsing and type-directed validation are delegated to pydantic. When
validation fails the error locations are resolved against the document so the
reported path names the rejected node. Syntax errors are re-located with the
standard library parser, whose character offset maps back to a path.
"""

from __future__ import annotations

import json as _json
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from pathjson.services.decoding.diagnostics import (
    MISSING_ERROR_TYPES,
    DecodeDiagnostic,
    JsonPath,
    describe_input,
    locate_offset,
    resolve_location,
)
from pathjson.services.exceptions import DecodeError

T = TypeVar("T")

_UNPARSED = object()


@lru_cache(maxsize=256)
def _cached_adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def _adapter_for(shape: Any) -> TypeAdapter:
    try:
        return _cached_adapter(shape)
    except TypeError:
        # Unhashable shapes, e.g. Annotated with list metadata.
        return TypeAdapter(shape)


def decode(data: bytes, shape: type[T], *, strict: bool = True) -> T:
    """Decode ``data`` into ``shape`` or raise ``DecodeError``.

    The returned value is freshly constructed on every call. On failure the
    error carries one diagnostic per rejected node; the first is the one
    reported to clients.
    """
    adapter = _adapter_for(shape)
    try:
        return adapter.validate_json(data, strict=strict)
    except ValidationError as exc:
        raise DecodeError(_diagnose(data, exc)) from exc


def _diagnose(data: bytes, exc: ValidationError) -> tuple[DecodeDiagnostic, ...]:
    errors = exc.errors(include_url=False)
    if any(err["type"] == "json_invalid" for err in errors):
        return (syntax_diagnostic(data, fallback=errors[0]["msg"]),)

    try:
        document = _json.loads(data)
    except (ValueError, RecursionError):
        document = _UNPARSED
    diagnostics = []
    for err in errors:
        error_type = err["type"]
        if document is _UNPARSED:
            path = JsonPath(tuple(err["loc"]))
        else:
            path = resolve_location(err["loc"], document, error_type)
        cause = err["msg"]
        if error_type not in MISSING_ERROR_TYPES and "input" in err:
            cause = f"{cause}, got {describe_input(err['input'])}"
        diagnostics.append(
            DecodeDiagnostic(path=path, cause=cause, kind="data", error_type=error_type)
        )
    return tuple(diagnostics)


def syntax_diagnostic(data: bytes, fallback: str = "invalid JSON") -> DecodeDiagnostic:
    """Diagnose a buffer that is not well-formed JSON."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        return DecodeDiagnostic(
            path=JsonPath.root(),
            cause=f"invalid UTF-8 at byte {exc.start}",
            kind="syntax",
            error_type="json_invalid",
        )
    try:
        _json.loads(text)
    except _json.JSONDecodeError as exc:
        return DecodeDiagnostic(
            path=locate_offset(text, exc.pos),
            cause=f"{exc.msg} at line {exc.lineno} column {exc.colno}",
            kind="syntax",
            error_type="json_invalid",
        )
    except RecursionError:
        # Nested deeper than the interpreter allows; no offset to locate.
        pass
    # The stdlib parser is more lenient (NaN, Infinity, deep nesting); keep the
    # validator's reason.
    return DecodeDiagnostic(
        path=JsonPath.root(), cause=fallback, kind="syntax", error_type="json_invalid"
    )
