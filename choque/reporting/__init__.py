"""Reporting module: summaries rebuilt from the probe log."""

from .report_generator import Report, generate_report, publish_report, render_report, summarize_log

__all__ = ["Report", "generate_report", "publish_report", "render_report", "summarize_log"]
