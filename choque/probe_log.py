"""Leveled, timestamped append-only log shared by probes and reports.

Every line has the shape ``<ISO8601 timestamp> <LEVEL> <message>``. The same
file is later rescanned by the report generator, so the format is part of the
contract.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import IO


class _IsoFormatter(logging.Formatter):
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds")


class _StrictFileHandler(logging.FileHandler):
    """File handler that lets write errors reach the caller."""

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        raise


LINE_FORMAT = "%(asctime)s %(levelname)s %(message)s"


class ProbeLog:
    """Explicitly owned log sink writing to a file and the console."""

    def __init__(self, log_path: str | Path, console: IO[str] | None = None, name: str = "choque"):
        self.log_path = Path(log_path)
        self.console = console
        # Not registered with logging.getLogger, so several sinks never share handlers.
        self._logger = logging.Logger(name, level=logging.INFO)
        self._logger.propagate = False
        self._handlers: list[logging.Handler] = []

    @property
    def is_open(self) -> bool:
        return bool(self._handlers)

    def open(self) -> ProbeLog:
        if self.is_open:
            return self

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        formatter = _IsoFormatter(LINE_FORMAT)

        file_handler = _StrictFileHandler(self.log_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        self._handlers.append(file_handler)

        if self.console is not None:
            console_handler = logging.StreamHandler(self.console)
            console_handler.setFormatter(formatter)
            self._handlers.append(console_handler)

        for handler in self._handlers:
            self._logger.addHandler(handler)
        return self

    def close(self) -> None:
        for handler in self._handlers:
            handler.flush()
            self._logger.removeHandler(handler)
            handler.close()
        self._handlers = []

    def __enter__(self) -> ProbeLog:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def info(self, message: str) -> None:
        self._emit(logging.INFO, message)

    def error(self, message: str) -> None:
        self._emit(logging.ERROR, message)

    def _emit(self, level: int, message: str) -> None:
        if not self.is_open:
            raise RuntimeError(f"ProbeLog for {self.log_path} is not open")
        self._logger.log(level, message)
