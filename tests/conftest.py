# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the conftest unit so this responsibility stays isolated, testable, and easy to evolve."""

import os
import tempfile
import pytest
from pathlib import Path

_ENV_VARS = (
    "PATHJSON_CONFIG",
    "PATHJSON_MAX_BODY_BYTES",
    "PATHJSON_STRICT",
    "PATHJSON_DECODE_DUMP",
    "PATHJSON_DECODE_DUMP_PATH",
)


@pytest.fixture(scope="session", autouse=True)
def session_temp_env():
    # Keep the developer's PATHJSON_* settings and dump files out of the test run.
    temp_dir = tempfile.TemporaryDirectory(prefix="pathjson_test_session_")
    originals = {name: os.environ.pop(name, None) for name in _ENV_VARS}
    os.environ["PATHJSON_DECODE_DUMP_PATH"] = str(
        Path(temp_dir.name) / "decode_failures.log"
    )

    yield

    temp_dir.cleanup()
    for name, value in originals.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


@pytest.fixture(autouse=True)
def clear_decode_logs():
    from pathjson.services.decoding.decode_logging import decode_logs

    decode_logs.clear()
    yield
    decode_logs.clear()
