# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Keeps a short history of rejected request bodies for the debug endpoints."""

from __future__ import annotations

import datetime
import json
import os
import uuid
from typing import Any, Dict, List

MAX_DECODE_LOGS = 100

# Global list of recent decode failures for the current process
decode_logs: List[Dict[str, Any]] = []


def add_decode_log(log_entry: Dict[str, Any]):
    """Add a log entry to the global list, keeping only the last 100 entries.

    If PATHJSON_DECODE_DUMP is set, also append the entry to a file.
    """
    decode_logs.append(log_entry)
    if len(decode_logs) > MAX_DECODE_LOGS:
        del decode_logs[: len(decode_logs) - MAX_DECODE_LOGS]

    if os.getenv("PATHJSON_DECODE_DUMP") != "1":
        return

    default_path = os.path.join("data", "logs", "decode_failures.log")
    log_path = os.getenv("PATHJSON_DECODE_DUMP_PATH") or default_path
    try:
        directory = os.path.dirname(log_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(log_path, "a", encoding="utf-8") as f:
            f.write("=" * 80 + "\n")
            f.write(f"TIMESTAMP: {log_entry.get('timestamp')}\n")
            f.write("-" * 80 + "\n")
            f.write(json.dumps(log_entry, indent=2, default=str) + "\n")
            f.write("=" * 80 + "\n\n")
    except OSError:
        # The dump is a development aid; the in-memory log is authoritative.
        pass


def create_log_entry(
    method: str,
    url: str,
    kind: str,
    detail: str,
    path: str | None = None,
    body_size: int | None = None,
) -> Dict[str, Any]:
    """Create a new log entry structure.

    The body itself is never stored, only its size.
    """
    return {
        "id": str(uuid.uuid4()),
        "timestamp": datetime.datetime.now().isoformat(),
        "request": {"method": method, "url": url, "body_size": body_size},
        "failure": {"kind": kind, "path": path, "detail": detail},
    }
