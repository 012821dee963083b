# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Decode JSON request bodies into typed values with field-path error reports."""

from pathjson.api.http_responses import install_error_handlers
from pathjson.api.json_body import Json, JsonBody, json_body
from pathjson.core.config import DecoderSettings, load_decoder_config
from pathjson.services.body.body_reader import read_body
from pathjson.services.decoding.decoder import decode
from pathjson.services.decoding.diagnostics import DecodeDiagnostic, JsonPath
from pathjson.services.exceptions import (
    BadRequestError,
    BodyReadError,
    DecodeError,
    InvalidJsonError,
    ServiceError,
    TransportReadError,
)

__all__ = [
    "BadRequestError",
    "BodyReadError",
    "DecodeDiagnostic",
    "DecodeError",
    "DecoderSettings",
    "InvalidJsonError",
    "Json",
    "JsonBody",
    "JsonPath",
    "ServiceError",
    "TransportReadError",
    "decode",
    "install_error_handlers",
    "json_body",
    "load_decoder_config",
    "read_body",
]
