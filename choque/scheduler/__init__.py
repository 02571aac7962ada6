"""Scheduler module for repeating probe jobs."""

from .job_scheduler import JobScheduler
from .probe_scheduler import ProbeScheduler

__all__ = ["JobScheduler", "ProbeScheduler"]
