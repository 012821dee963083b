# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Field paths and decode diagnostics.

A ``JsonPath`` is the ordered list of object keys and array indices leading
from the document root to one node. It renders the way people write them by
hand: ``user.addresses[2].zip``. The root path renders as an empty string;
empty keys and keys containing ``.``, ``[``, ``]`` or ``"`` render quoted in
brackets (``meta["a.b"]``) so every path reads back unambiguously.

Two routines produce paths:

- ``resolve_location`` turns a validator error location into a document path
  by walking the parsed document, so segments that only exist inside the
  validator (union member tags, ``[key]`` markers, ...) are dropped.
- ``locate_offset`` maps a character offset reported by a JSON parser back to
  the path the parser was inside when it stopped.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass, field
from typing import Any, Literal, Sequence, Union

Segment = Union[str, int]

# Error types where the final location segment names a key absent from the input.
MISSING_ERROR_TYPES = frozenset(
    {
        "missing",
        "missing_argument",
        "missing_keyword_only_argument",
        "missing_positional_only_argument",
    }
)

_MAX_INPUT_PREVIEW = 40

# Keys holding any of these, or empty keys, render quoted: ["a.b"].
_RESERVED_KEY_CHARS = frozenset(".[]\"")


@dataclass(frozen=True)
class JsonPath:
    """Root-to-node location inside a JSON document."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def root(cls) -> JsonPath:
        return cls()

    def child(self, segment: Segment) -> JsonPath:
        return JsonPath(self.segments + (segment,))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def __str__(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif not segment or _RESERVED_KEY_CHARS.intersection(segment):
                parts.append(f"[{_json.dumps(segment, ensure_ascii=False)}]")
            elif parts:
                parts.append(f".{segment}")
            else:
                parts.append(segment)
        return "".join(parts)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)


@dataclass(frozen=True)
class DecodeDiagnostic:
    """One decode failure: where it happened and what was wrong there."""

    path: JsonPath
    cause: str
    kind: Literal["syntax", "data"] = "data"
    error_type: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.path}: {self.cause}"

    def as_dict(self) -> dict[str, Any]:
        return {"path": str(self.path), "cause": self.cause, "kind": self.kind}


def _is_index(segment: Any) -> bool:
    return isinstance(segment, int) and not isinstance(segment, bool)


def resolve_location(
    loc: Sequence[Segment], document: Any, error_type: str | None = None
) -> JsonPath:
    """Resolve a validator error location against the parsed document.

    Only segments that address real nodes are kept. The last segment of a
    missing-field error is kept as well, since it names the absent key.
    """
    segments: list[Segment] = []
    node = document
    last = len(loc) - 1
    for position, segment in enumerate(loc):
        if isinstance(node, dict) and isinstance(segment, str) and segment in node:
            segments.append(segment)
            node = node[segment]
        elif isinstance(node, list) and _is_index(segment) and 0 <= segment < len(node):
            segments.append(segment)
            node = node[segment]
        elif (
            position == last
            and error_type in MISSING_ERROR_TYPES
            and isinstance(node, dict)
            and isinstance(segment, str)
        ):
            segments.append(segment)
    return JsonPath(tuple(segments))


class _Frame:
    """One open container while scanning a document prefix."""

    __slots__ = ("is_object", "key", "after_colon", "index", "done")

    def __init__(self, is_object: bool):
        self.is_object = is_object
        self.key: str | None = None
        self.after_colon = False
        self.index = 0
        self.done = False

    def expects_value(self) -> bool:
        return not self.is_object or self.after_colon

    def next_member(self) -> None:
        self.key = None
        self.after_colon = False
        self.index += 1
        self.done = False

    def segment(self) -> Segment | None:
        if self.done:
            return None
        if self.is_object:
            return self.key
        return self.index


def _string_end(text: str, start: int, limit: int) -> int | None:
    """Index of the quote closing the string opened at ``start``, if before ``limit``."""
    pos = start + 1
    while pos < limit:
        ch = text[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == '"':
            return pos
        pos += 1
    return None


def locate_offset(text: str, offset: int) -> JsonPath:
    """Path of the node a parser was inside when it failed at ``offset``.

    Scans ``text[:offset]`` keeping a stack of open containers: objects track
    the key currently being read, arrays the index of the current element.
    Members whose value was read completely drop out of the path, so an error
    at a missing delimiter is reported on the enclosing container.
    """
    stack: list[_Frame] = []
    limit = min(max(offset, 0), len(text))
    pos = 0
    while pos < limit:
        ch = text[pos]
        top = stack[-1] if stack else None
        if ch == '"':
            end = _string_end(text, pos, limit)
            if end is None:
                break
            if top is not None and not top.expects_value():
                literal = text[pos : end + 1]
                try:
                    top.key = _json.loads(literal)
                except ValueError:
                    top.key = literal[1:-1]
            elif top is not None:
                top.done = True
            pos = end + 1
            continue
        if ch in "{[":
            stack.append(_Frame(is_object=ch == "{"))
        elif ch in "}]":
            if stack:
                stack.pop()
            if stack:
                stack[-1].done = True
        elif ch == ":":
            if top is not None and top.is_object:
                top.after_colon = True
        elif ch == ",":
            if top is not None:
                top.next_member()
        elif not ch.isspace() and top is not None and top.expects_value():
            # First character of a scalar that was scanned past in full.
            top.done = True
        pos += 1

    segments = [seg for seg in (frame.segment() for frame in stack) if seg is not None]
    return JsonPath(tuple(segments))


def describe_input(value: Any) -> str:
    """Short description of a JSON value naming its kind."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return f"boolean {_json.dumps(value)}"
    if isinstance(value, (int, float)):
        return f"number {value}"
    if isinstance(value, str):
        preview = _json.dumps(value, ensure_ascii=False)
        if len(preview) > _MAX_INPUT_PREVIEW:
            preview = preview[: _MAX_INPUT_PREVIEW - 4] + '..."'
        return f"string {preview}"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__

