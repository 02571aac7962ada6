"""Probe interval bounds."""

MIN_INTERVAL_MS = 60 * 1000
MAX_INTERVAL_MS = 10 * 60 * 60 * 1000


def validate_interval(requested_ms: int) -> int:
    """Clamp a requested interval (milliseconds) into [1 minute, 10 hours].

    Out-of-range values are coerced, never rejected.
    """
    return max(MIN_INTERVAL_MS, min(MAX_INTERVAL_MS, int(requested_ms)))


def format_seconds(interval_ms: int) -> str:
    """Milliseconds as seconds for log messages: 90000 -> "90", 12345678 -> "12345.678"."""
    return f"{interval_ms / 1000:.15g}"
