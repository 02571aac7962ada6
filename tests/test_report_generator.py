from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from choque.probe_log import ProbeLog
from choque.reporting.report_generator import Report, generate_report, publish_report, render_report, summarize_log

TS = "2025-01-01T10:00:00+00:00"


def _log(*messages: str, level: str = "INFO") -> str:
    return "\n".join(f"{TS} {level} {m}" for m in messages) + "\n"


def test_counts_successes_and_failures() -> None:
    text = _log(
        "[https://a.test] SUCCESS 200 10ms",
        "[https://a.test] SUCCESS 200 20ms",
        "[https://b.test] SUCCESS 200 30ms",
        "[https://b.test] FAILED 502 - [Request failed with status code 502]",
        "[https://c.test] FAILED - - [ConnectError: refused]",
        "Starting pings for https://a.test every 60s",
    )
    report = summarize_log(text, today=date(2025, 1, 2))
    assert report == Report(
        period_label=date(2025, 1, 2),
        total_pings=5,
        successes=3,
        failures=2,
        average_response_time_ms=20.0,
    )


def test_average_response_time_two_decimals() -> None:
    report = summarize_log(_log("[https://a.test] SUCCESS 200 120ms", "[https://a.test] SUCCESS 200 80ms"))
    assert report.average_response_time_ms == 100.00
    assert "Average Response Time: 100.00ms" in render_report(report)

    uneven = summarize_log(_log(*(f"[https://a.test] SUCCESS 200 {ms}ms" for ms in (1, 1, 2))))
    assert uneven.average_response_time_ms == 1.33


def test_no_response_times_renders_na() -> None:
    report = summarize_log(_log("[https://b.test] FAILED - - [ConnectError: refused]"))
    assert report.total_pings == 1
    assert report.average_response_time_ms is None
    assert render_report(report).splitlines()[-1] == "Average Response Time: N/A"


def test_non_info_lines_are_ignored() -> None:
    text = _log("[https://a.test] SUCCESS 200 5ms") + _log("[https://a.test] FAILED 500 -", level="ERROR")
    report = summarize_log(text)
    assert (report.total_pings, report.successes, report.failures) == (1, 1, 0)


def test_marker_in_url_is_counted_as_is() -> None:
    # Plain text scan: a marker anywhere on an INFO line counts.
    report = summarize_log(_log("Added https://SUCCESS.test with interval 60s"))
    assert report.total_pings == 1
    assert report.successes == 1


def test_render_report_layout() -> None:
    report = Report(period_label=date(2025, 3, 4), total_pings=5, successes=3, failures=2, average_response_time_ms=12.5)
    assert render_report(report) == (
        "--- Choque Report (2025-03-04) ---\n"
        "Total Pings: 5\n"
        "Successes: 3\n"
        "Failures: 2\n"
        "Average Response Time: 12.50ms"
    )


def test_published_report_does_not_change_later_counts(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log_path = tmp_path / "choque.log"
    log_path.write_text(
        _log(
            "[https://a.test] SUCCESS 200 120ms",
            "[https://a.test] SUCCESS 200 80ms",
            "[https://a.test] SUCCESS 200 100ms",
            "[https://b.test] FAILED 500 - [Request failed with status code 500]",
            "[https://b.test] FAILED - - [ReadTimeout: timed out]",
        ),
        encoding="utf-8",
    )

    with ProbeLog(log_path) as sink:
        first = publish_report(log_path, sink)
        second = publish_report(log_path, sink)

    assert first is not None and second is not None
    assert (first.total_pings, first.successes, first.failures) == (5, 3, 2)
    assert (second.total_pings, second.successes, second.failures) == (5, 3, 2)
    assert second.average_response_time_ms == first.average_response_time_ms == 100.0

    out = capsys.readouterr().out
    assert out.count("Total Pings: 5") == 2
    assert log_path.read_text(encoding="utf-8").count("--- Choque Report (") == 2


def test_unreadable_log_is_logged_not_raised(tmp_path: Path) -> None:
    sink_path = tmp_path / "choque.log"
    with ProbeLog(sink_path) as sink:
        assert publish_report(tmp_path / "missing" / "other.log", sink) is None

    text = sink_path.read_text(encoding="utf-8")
    assert " ERROR Failed to generate report: " in text


def test_generate_report_reads_file(tmp_path: Path) -> None:
    log_path = tmp_path / "choque.log"
    log_path.write_text(_log("[https://a.test] SUCCESS 200 7ms"), encoding="utf-8")
    report = generate_report(log_path, today=date(2025, 1, 1))
    assert report.total_pings == 1
    assert report.average_response_time_ms == 7.0
