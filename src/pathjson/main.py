# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the main unit so this responsibility stays isolated, testable, and easy to evolve.

Reference host application for the pathjson body decoder.
Includes error handling and router registration; applications usually call
``install_error_handlers`` on their own app instead.
"""

from __future__ import annotations

import argparse
from typing import Optional
import os

from fastapi import FastAPI, APIRouter

from pathjson.api.http_responses import install_error_handlers
from pathjson.api.v1.debug import router as debug_router  # noqa: E402
from pathjson.api.v1.echo import router as echo_router  # noqa: E402


def create_app() -> FastAPI:
    """Create the FastAPI app.

    Uvicorn's reload mode requires an import string; using an app factory keeps
    route registration consistent across reload subprocesses.
    """

    app = FastAPI(title="pathjson")

    api_v1_router = APIRouter(prefix="/api/v1")
    api_v1_router.include_router(debug_router)
    api_v1_router.include_router(echo_router)
    api_v1_router.add_api_route(
        "/health", endpoint=lambda: {"status": "ok"}, methods=["GET"]
    )
    app.include_router(api_v1_router)

    install_error_handlers(app)

    return app


app = create_app()


def build_arg_parser() -> argparse.ArgumentParser:
    """Build Arg Parser."""
    parser = argparse.ArgumentParser(
        prog="pathjson",
        description="Run the pathjson reference FastAPI server",
    )
    parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port", type=int, default=8000, help="Port to bind (default: 8000)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (development only)",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Log level for the server (default: info)",
    )
    parser.add_argument(
        "--decode-dump",
        action="store_true",
        help="Append rejected request bodies' diagnostics to a file",
    )
    parser.add_argument(
        "--decode-dump-path",
        default=None,
        help="Path for the decode failure dump file (overrides default)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entrypoint to run the server via a normal Python invocation.

    Examples:
      python -m pathjson.main --help
      python -m pathjson.main --host 0.0.0.0 --port 8000 --reload
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.decode_dump:
        os.environ["PATHJSON_DECODE_DUMP"] = "1"
    if args.decode_dump_path:
        os.environ["PATHJSON_DECODE_DUMP_PATH"] = args.decode_dump_path

    # Import uvicorn lazily so that importing this module doesn't require it for tests/tools
    import uvicorn  # type: ignore

    if args.reload:
        app_target = "pathjson.main:create_app"
        factory = True
    else:
        app_target = app
        factory = False

    uvicorn.run(
        app_target,
        host=args.host,
        port=args.port,
        reload=bool(args.reload),
        log_level=args.log_level,
        factory=factory,
    )


if __name__ == "__main__":
    main()
