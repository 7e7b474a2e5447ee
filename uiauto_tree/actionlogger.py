"""
@file actionlogger.py
@brief Dispatch log for fire_event.

Disabled by default. Each dispatch becomes one record: the action, the node
that handled it, a status (ok, noop, error), the duration and the event
metadata. Records print as " | "-joined lines or as one JSON object per line.
"""

from __future__ import annotations

import json
import os
import threading
from datetime import datetime
from typing import Any, Dict, Optional


class ActionLogger:
    """Thread-safe dispatch logger writing to stdout and/or a file."""

    FORMATS = ("line", "jsonl")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._console = True
        self._file_path: Optional[str] = None
        self._format = "line"

    def configure(
        self,
        *,
        console: bool = True,
        file_path: Optional[str] = None,
        format: str = "line",
    ) -> None:
        """
        @param console Print records to stdout
        @param file_path Also append records to this file
        @param format "line" or "jsonl"
        @throws ValueError for an unknown format
        """
        fmt = (format or "line").lower()
        if fmt not in self.FORMATS:
            raise ValueError(f"ActionLogger format must be one of {self.FORMATS}, got: {format!r}")

        with self._lock:
            self._console = bool(console)
            self._file_path = file_path
            self._format = fmt

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def log(
        self,
        *,
        action: str,
        node: Optional[str] = None,
        status: str = "ok",
        duration_ms: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
        exception: Optional[BaseException] = None,
    ) -> None:
        """Record one dispatch. Metadata keys become top-level fields."""
        if not self._enabled:
            return

        record: Dict[str, Any] = {
            "time": datetime.now().strftime("%H:%M:%S.%f")[:-3],
            "action": action,
            "node": node,
            "status": status,
        }
        if duration_ms is not None:
            record["duration_ms"] = duration_ms
        record.update(metadata or {})
        if exception is not None:
            record["error"] = f"{type(exception).__name__}: {exception}"

        text = self._render(record)
        with self._lock:
            if self._console:
                print(text, flush=True)
            if self._file_path:
                _append(self._file_path, text)

    def _render(self, record: Dict[str, Any]) -> str:
        if self._format == "jsonl":
            return json.dumps(record, ensure_ascii=False, default=str)

        parts = [record["time"], record["action"]]
        for key, value in record.items():
            if key in ("time", "action") or value is None:
                continue
            parts.append(f"{key}='{value}'" if key == "node" else f"{key}={value}")
        return " | ".join(parts)


def _append(path: str, text: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(text + "\n")


ACTION_LOGGER = ActionLogger()
