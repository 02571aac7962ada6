from __future__ import annotations

from ..probe_log import ProbeLog
from .http_probe import ProbeResult


def format_probe_line(result: ProbeResult) -> str:
    """[<url>] <SUCCESS|FAILED> <status|-> <N>ms|- [<error>]"""
    status = str(result.status_code) if result.status_code is not None else "-"
    elapsed = f"{result.response_time_ms}ms" if result.response_time_ms is not None else "-"
    line = f"[{result.url}] {result.outcome.value} {status} {elapsed}"
    if result.error:
        line += f" [{result.error}]"
    return line


class ResultRecorder:
    """Appends one INFO line per probe result to the shared log."""

    def __init__(self, sink: ProbeLog):
        self.sink = sink

    def record(self, result: ProbeResult) -> str:
        line = format_probe_line(result)
        self.sink.info(line)
        return line
