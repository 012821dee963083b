# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Path-tracking JSON decoding."""

from pathjson.services.decoding.decoder import decode, syntax_diagnostic
from pathjson.services.decoding.diagnostics import (
    DecodeDiagnostic,
    JsonPath,
    locate_offset,
    resolve_location,
)

__all__ = [
    "DecodeDiagnostic",
    "JsonPath",
    "decode",
    "locate_offset",
    "resolve_location",
    "syntax_diagnostic",
]
