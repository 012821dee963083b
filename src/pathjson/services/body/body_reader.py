# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Reads the complete body of one request.

The only suspension point of the decoding pipeline. Transport problems are
raised as ``TransportReadError`` so callers can tell them apart from bodies
that arrived intact but do not decode.
"""

from __future__ import annotations

from fastapi import Request
from starlette.requests import ClientDisconnect

from pathjson.services.exceptions import TransportReadError


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise TransportReadError(f"invalid Content-Length header {raw!r}") from None


async def read_body(request: Request, max_bytes: int | None = None) -> bytes:
    """Return the full request body, in arrival order.

    ``max_bytes`` of ``None`` or ``0`` disables the size check. The body is
    cached on the request, so handlers may still call ``request.body()``.
    """
    limit = max_bytes or None
    declared = _declared_length(request)
    if limit is not None and declared is not None and declared > limit:
        raise TransportReadError(
            f"payload of {declared} bytes exceeds the limit of {limit} bytes"
        )

    chunks: list[bytes] = []
    received = 0
    try:
        async for chunk in request.stream():
            received += len(chunk)
            if limit is not None and received > limit:
                raise TransportReadError(
                    f"payload exceeds the limit of {limit} bytes"
                )
            chunks.append(chunk)
    except ClientDisconnect as exc:
        raise TransportReadError(
            "client disconnected before the body was complete"
        ) from exc
    except RuntimeError as exc:
        # Starlette refuses to replay a stream that something else consumed.
        raise TransportReadError(str(exc)) from exc

    if declared is not None and received < declared:
        raise TransportReadError(
            f"body truncated: received {received} of {declared} bytes"
        )

    body = b"".join(chunks)
    # Same private cache Starlette's Request.body() fills; stream() and body()
    # replay it. Check this attribute name when upgrading Starlette.
    request._body = body
    return body
