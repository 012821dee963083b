# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Domain exception hierarchy for the body decoding pipeline.

Purpose: Provide HTTP-agnostic exceptions that carry enough context for the
API layer (or a global exception handler) to translate them into proper HTTP
responses. The body reader and the decoder raise the framework-free
``TransportReadError`` and ``DecodeError``; the dependency glue converts those
into ``ServiceError`` subclasses with their final client-facing detail.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathjson.services.decoding.diagnostics import DecodeDiagnostic


class ServiceError(Exception):
    """Base domain exception that carries an HTTP-equivalent status code.

    The global exception handler registered by ``install_error_handlers``
    translates these into JSON error responses automatically.
    """

    default_status_code: int = 500

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = (
            status_code if status_code is not None else self.default_status_code
        )


class BadRequestError(ServiceError):
    """Raised when the caller provides invalid or missing input (HTTP 400)."""

    default_status_code = 400


class BodyReadError(BadRequestError):
    """Raised when the request body could not be read in full (HTTP 400)."""

    def __init__(self, cause: str, status_code: int | None = None):
        super().__init__(f"Failed to read request body: {cause}", status_code)
        self.cause = cause


class InvalidJsonError(BadRequestError):
    """Raised when the body is not JSON matching the target shape (HTTP 400)."""

    def __init__(
        self,
        diagnostic: DecodeDiagnostic,
        diagnostics: tuple[DecodeDiagnostic, ...] = (),
        status_code: int | None = None,
    ):
        super().__init__(
            f"Invalid JSON at {diagnostic.path}: {diagnostic.cause}", status_code
        )
        self.diagnostic = diagnostic
        self.diagnostics = diagnostics or (diagnostic,)


class TransportReadError(Exception):
    """The byte stream of a request ended in error, was truncated, or was too large."""

    def __init__(self, cause: str):
        super().__init__(cause)
        self.cause = cause


class DecodeError(ValueError):
    """A JSON document failed to decode into its target shape.

    ``diagnostic`` is the first failure in document order; ``diagnostics``
    holds every failure the validator reported.
    """

    def __init__(self, diagnostics: tuple[DecodeDiagnostic, ...]):
        if not diagnostics:
            raise ValueError("DecodeError requires at least one diagnostic")
        super().__init__(str(diagnostics[0]))
        self.diagnostics = diagnostics

    @property
    def diagnostic(self) -> DecodeDiagnostic:
        return self.diagnostics[0]
