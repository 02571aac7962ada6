"""Interval job scheduling on top of APScheduler's asyncio scheduler."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = structlog.get_logger(__name__)

# Overlapping runs of the same job are allowed; this only caps runaway pile-ups.
OVERLAP_MAX_INSTANCES = 32


class JobScheduler:
    """Manages repeating jobs using APScheduler."""

    def __init__(self, max_instances: int = OVERLAP_MAX_INSTANCES):
        self.max_instances = max_instances
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.jobs: Dict[str, Dict[str, Any]] = {}
        self.running = False

    async def start(self):
        """Start the scheduler on the running event loop."""
        if self.running:
            logger.warning("Scheduler already running")
            return

        self.scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop())
        self.scheduler.start()
        self.running = True
        logger.debug("Job scheduler started")

    async def stop(self):
        """Stop the scheduler without waiting for in-flight jobs."""
        if not self.running:
            return

        self.scheduler.shutdown(wait=False)
        # AsyncIOScheduler defers shutdown to the loop; let it run.
        await asyncio.sleep(0)
        self.running = False
        self.jobs.clear()
        logger.debug("Job scheduler stopped")

    def add_interval_job(
        self,
        job_id: str,
        func: Callable,
        seconds: float,
        args: Optional[tuple] = None,
        description: Optional[str] = None,
    ):
        """Add a job that fires every ``seconds``, first one interval from now."""
        if not self.running:
            raise RuntimeError("Scheduler is not running")

        if job_id in self.jobs:
            logger.warning("Job already exists, replacing", job_id=job_id)
            self.remove_job(job_id)

        job = self.scheduler.add_job(
            func=func,
            trigger=IntervalTrigger(seconds=seconds),
            id=job_id,
            args=args or (),
            name=description or job_id,
            max_instances=self.max_instances,
            coalesce=False,
            misfire_grace_time=None,
        )

        self.jobs[job_id] = {"job": job, "seconds": seconds}

        logger.debug("Added interval job", job_id=job_id, interval_seconds=seconds, description=description)
        return job

    def remove_job(self, job_id: str) -> bool:
        """Remove a scheduled job."""
        if job_id not in self.jobs:
            logger.warning("Job not found", job_id=job_id)
            return False

        self.scheduler.remove_job(job_id)
        del self.jobs[job_id]
        logger.debug("Removed job", job_id=job_id)
        return True

    def trigger_now(self, job_id: str) -> bool:
        """Move a job's next firing to now; the interval continues from there."""
        if job_id not in self.jobs:
            logger.warning("Job not found", job_id=job_id)
            return False

        self.scheduler.modify_job(job_id, next_run_time=datetime.now(timezone.utc))
        return True

    def get_job_status(self, job_id: str) -> Optional[Dict[str, Any]]:
        """Get status information for a job."""
        if job_id not in self.jobs:
            return None

        job_info = self.jobs[job_id]
        scheduler_job = self.scheduler.get_job(job_id)
        if scheduler_job is None:
            return None

        return {
            "job_id": job_id,
            "interval_seconds": job_info["seconds"],
            "next_run": scheduler_job.next_run_time.isoformat() if scheduler_job.next_run_time else None,
        }

    def list_jobs(self) -> List[Dict[str, Any]]:
        """List all scheduled jobs."""
        job_statuses = []
        for job_id in self.jobs:
            status = self.get_job_status(job_id)
            if status:
                job_statuses.append(status)
        return job_statuses
