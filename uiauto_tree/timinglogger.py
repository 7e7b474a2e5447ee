"""
@file timinglogger.py
@brief Wait lifecycle log for wait_for_element.
"""

from __future__ import annotations

import os
import threading
import time
from typing import Any, Dict, Optional


class TimingLogger:
    """
    Prints one line per wait event (wait_start, wait_retry, wait_success,
    wait_timeout), optionally appending it to a file. Disabled by default.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._console = True
        self._file_path: Optional[str] = None

    def configure(self, *, console: bool = True, file_path: Optional[str] = None) -> None:
        with self._lock:
            self._console = bool(console)
            self._file_path = file_path

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
        event: str,
        description: Optional[str] = None,
        status: str = "info",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        if not self._enabled:
            return

        fields: Dict[str, Any] = {"event": event}
        if description:
            fields["description"] = description
        fields.update(metadata or {})

        line = f"[{status.lower()}] [timing] time={time.strftime('%H:%M:%S')} " + " ".join(
            f"{key}={value}" for key, value in fields.items()
        )

        with self._lock:
            if self._console:
                print(line, flush=True)
            if self._file_path:
                os.makedirs(os.path.dirname(os.path.abspath(self._file_path)), exist_ok=True)
                with open(self._file_path, "a", encoding="utf-8") as f:
                    f.write(line + "\n")


TIMING_LOGGER = TimingLogger()
