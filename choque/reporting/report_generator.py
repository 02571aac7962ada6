"""Summary reports computed by rescanning the probe log.

The log text is the only record of past probes, so the report is rebuilt
from plain substring matches on every run. Report blocks written back into
the log start on a fresh line, so their own lines never carry the level
marker and are ignored by later scans.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from ..checks.http_probe import ProbeOutcome
from ..errors import ReportError
from ..probe_log import ProbeLog

logger = structlog.get_logger(__name__)

LEVEL_MARKER = "INFO"
SUCCESS_MARKER = ProbeOutcome.SUCCESS.value
FAILED_MARKER = ProbeOutcome.FAILED.value

_RESPONSE_TIME_RE = re.compile(r"(\d+)ms")


@dataclass(frozen=True)
class Report:
    """Aggregate probe statistics for the whole log."""
    period_label: date
    total_pings: int
    successes: int
    failures: int
    average_response_time_ms: Optional[float] = None


def _is_probe_line(line: str) -> bool:
    return LEVEL_MARKER in line and (SUCCESS_MARKER in line or FAILED_MARKER in line)


def summarize_log(text: str, today: Optional[date] = None) -> Report:
    """Count probe lines and average the first ``<N>ms`` value on each of them."""
    lines = [line for line in text.split("\n") if _is_probe_line(line)]

    response_times = []
    for line in lines:
        match = _RESPONSE_TIME_RE.search(line)
        if match:
            response_times.append(int(match.group(1)))

    average = None
    if response_times:
        average = round(sum(response_times) / len(response_times), 2)

    return Report(
        period_label=today or datetime.now(timezone.utc).date(),
        total_pings=len(lines),
        successes=sum(1 for line in lines if SUCCESS_MARKER in line),
        failures=sum(1 for line in lines if FAILED_MARKER in line),
        average_response_time_ms=average,
    )


def generate_report(log_path: str | Path, today: Optional[date] = None) -> Report:
    """Build a report from the current contents of the log file."""
    path = Path(log_path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReportError(str(e)) from e
    return summarize_log(text, today=today)


def render_report(report: Report) -> str:
    average = "N/A"
    if report.average_response_time_ms is not None:
        average = f"{report.average_response_time_ms:.2f}ms"

    return "\n".join([
        f"--- Choque Report ({report.period_label.isoformat()}) ---",
        f"Total Pings: {report.total_pings}",
        f"Successes: {report.successes}",
        f"Failures: {report.failures}",
        f"Average Response Time: {average}",
    ])


def publish_report(log_path: str | Path, sink: ProbeLog) -> Optional[Report]:
    """Print the report and append it to the log. Failures are logged, not raised."""
    try:
        report = generate_report(log_path)
    except ReportError as e:
        sink.error(f"Failed to generate report: {e}")
        return None

    block = render_report(report)
    print(block)
    sink.info(f"\n{block}\n")
    logger.debug("Report generated", total_pings=report.total_pings, log=str(log_path))
    return report
