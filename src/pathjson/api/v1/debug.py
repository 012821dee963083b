# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the debug unit so this responsibility stays isolated, testable, and easy to evolve."""

from fastapi import APIRouter
from pathjson.services.decoding.decode_logging import decode_logs

router = APIRouter(prefix="/debug", tags=["debug"])


router.add_api_route("/decode_logs", endpoint=lambda: decode_logs, methods=["GET"])


@router.delete("/decode_logs")
async def clear_decode_logs():
    """Clear the recorded decode failures."""
    decode_logs.clear()
    return {"status": "ok"}
