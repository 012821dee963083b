# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the echo unit so this responsibility stays isolated, testable, and easy to evolve.

Pydantic models for the reference app's sample decoding endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, NonNegativeInt


class EchoAuthor(BaseModel):
    name: str
    email: str | None = None


class EchoRequest(BaseModel):
    """Request body for ``POST /api/v1/echo``."""

    message: str
    repeat: NonNegativeInt = 1
    tags: list[str] = Field(default_factory=list)
    author: EchoAuthor | None = None
