from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

import httpx

PROBE_TIMEOUT_SECONDS = 5.0

_WHITESPACE_RE = re.compile(r"\s+")


class ProbeOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


@dataclass(frozen=True)
class ProbeResult:
    url: str
    outcome: ProbeOutcome
    status_code: int | None = None
    response_time_ms: int | None = None
    error: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return self.outcome is ProbeOutcome.SUCCESS


def _describe_error(exc: Exception) -> str:
    """
    One-line, never-empty description of a transport failure.
    httpx messages can span lines, which would split a log record.
    """
    msg = _WHITESPACE_RE.sub(" ", str(exc or "")).strip()
    name = type(exc).__name__
    return f"{name}: {msg}" if msg else name


async def probe_url(
    url: str,
    client: httpx.AsyncClient,
    *,
    timeout_seconds: float = PROBE_TIMEOUT_SECONDS,
) -> ProbeResult:
    """
    HEAD the URL once and classify the outcome. Never raises for network problems.

    Non-2xx responses count as failures, matching clients that raise on error statuses.
    """
    timestamp = datetime.now(timezone.utc)
    started = time.perf_counter()
    try:
        resp = await client.head(url, timeout=timeout_seconds, follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        return ProbeResult(
            url=url,
            outcome=ProbeOutcome.FAILED,
            status_code=status_code,
            error=f"Request failed with status code {status_code}",
            timestamp=timestamp,
        )
    except (httpx.RequestError, httpx.InvalidURL) as e:
        return ProbeResult(url=url, outcome=ProbeOutcome.FAILED, error=_describe_error(e), timestamp=timestamp)

    elapsed_ms = int((time.perf_counter() - started) * 1000.0)
    return ProbeResult(
        url=url,
        outcome=ProbeOutcome.SUCCESS,
        status_code=resp.status_code,
        response_time_ms=max(0, elapsed_ms),
        timestamp=timestamp,
    )
