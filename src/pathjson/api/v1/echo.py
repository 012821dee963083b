# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the echo unit so this responsibility stays isolated, testable, and easy to evolve."""

from fastapi import APIRouter

from pathjson.api.json_body import Json, json_body
from pathjson.models.echo import EchoRequest

router = APIRouter(tags=["Echo"])


@router.post("/echo")
async def api_echo(body: Json[EchoRequest] = json_body(EchoRequest)):
    """Echo a decoded body back; rejected bodies show up in the decode log."""
    request = body.into_inner()
    return {
        "ok": True,
        "message": " ".join([request.message] * request.repeat),
        "tags": request.tags,
        "author": request.author.name if request.author else None,
    }
