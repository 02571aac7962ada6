"""Single-URL probing and result formatting."""

from .http_probe import PROBE_TIMEOUT_SECONDS, ProbeOutcome, ProbeResult, probe_url
from .recorder import ResultRecorder, format_probe_line

__all__ = [
    "PROBE_TIMEOUT_SECONDS",
    "ProbeOutcome",
    "ProbeResult",
    "ResultRecorder",
    "format_probe_line",
    "probe_url",
]
