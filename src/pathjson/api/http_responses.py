# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the http responses unit so this responsibility stays isolated, testable, and easy to evolve."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pathjson.services.exceptions import InvalidJsonError, ServiceError


def error_json(detail: str, status_code: int = 400, **extra: object) -> JSONResponse:
    body: dict[str, object] = {"ok": False, "detail": detail}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def install_error_handlers(app: FastAPI) -> None:
    """Translate ``ServiceError`` into ``{"ok": false, "detail": ...}`` responses.

    Decode failures also carry the failing path and every diagnostic.
    """

    @app.exception_handler(ServiceError)
    async def _service_error_handler(
        _request: Request, exc: ServiceError
    ) -> JSONResponse:
        if isinstance(exc, InvalidJsonError):
            return error_json(
                exc.detail,
                status_code=exc.status_code,
                path=str(exc.diagnostic.path),
                errors=[d.as_dict() for d in exc.diagnostics],
            )
        return error_json(exc.detail, status_code=exc.status_code)
