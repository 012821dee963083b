# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""FastAPI dependency that decodes a JSON request body with field-path errors.

Usage::

    @router.post("/users")
    async def create_user(user: Json[User] = json_body(User)):
        ...

A body that does not match ``User`` is rejected with HTTP 400 and a detail
such as ``Invalid JSON at addresses[2].zip: Input should be a valid string,
got number 12345``.
"""

from typing import Any, Generic, TypeVar

from fastapi import Depends, Request

from pathjson.core.config import load_decoder_config
from pathjson.services.body.body_reader import read_body
from pathjson.services.decoding.decode_logging import add_decode_log, create_log_entry
from pathjson.services.decoding.decoder import decode
from pathjson.services.exceptions import (
    BodyReadError,
    DecodeError,
    InvalidJsonError,
    TransportReadError,
)

T = TypeVar("T")


class Json(Generic[T]):
    """Holds a decoded body.

    Attribute reads and writes go to the wrapped value, so handlers can use
    ``data.name`` directly. ``into_inner()`` hands the value over.
    """

    __slots__ = ("value",)

    def __init__(self, value: T):
        object.__setattr__(self, "value", value)

    def into_inner(self) -> T:
        return self.value

    def __getattr__(self, name: str) -> Any:
        if name == "value" or name.startswith("__"):
            raise AttributeError(name)
        return getattr(self.value, name)

    def __setattr__(self, name: str, new_value: Any) -> None:
        if name == "value" or name.startswith("__"):
            object.__setattr__(self, name, new_value)
        else:
            setattr(self.value, name, new_value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Json):
            return self.value == other.value
        return NotImplemented

    def __repr__(self) -> str:
        return f"Json({self.value!r})"


class JsonBody(Generic[T]):
    """Dependency reading the request body and decoding it into ``shape``.

    Options left as ``None`` come from ``load_decoder_config()``.
    """

    def __init__(
        self,
        shape: type[T],
        *,
        max_bytes: int | None = None,
        strict: bool | None = None,
    ):
        if max_bytes is None or strict is None:
            settings = load_decoder_config()
            if max_bytes is None:
                max_bytes = settings.max_body_bytes
            if strict is None:
                strict = settings.strict
        self.shape = shape
        self.max_bytes = max_bytes
        self.strict = strict

    async def __call__(self, request: Request) -> Json[T]:
        try:
            body = await read_body(request, self.max_bytes)
        except TransportReadError as exc:
            error = BodyReadError(exc.cause)
            add_decode_log(
                create_log_entry(
                    request.method, str(request.url), "transport", error.detail
                )
            )
            raise error from exc

        try:
            value = decode(body, self.shape, strict=self.strict)
        except DecodeError as exc:
            error = InvalidJsonError(exc.diagnostic, exc.diagnostics)
            add_decode_log(
                create_log_entry(
                    request.method,
                    str(request.url),
                    exc.diagnostic.kind,
                    error.detail,
                    path=str(exc.diagnostic.path),
                    body_size=len(body),
                )
            )
            raise error from exc

        return Json(value)

    def __repr__(self) -> str:
        name = getattr(self.shape, "__name__", repr(self.shape))
        return f"JsonBody({name})"


def json_body(
    shape: type[T], *, max_bytes: int | None = None, strict: bool | None = None
) -> Any:
    """Shortcut for ``Depends(JsonBody(shape, ...))``."""
    return Depends(JsonBody(shape, max_bytes=max_bytes, strict=strict))
