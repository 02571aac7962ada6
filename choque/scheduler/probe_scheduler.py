"""Fan-out of configured targets into independent repeating probe jobs."""

import asyncio
from typing import Awaitable, Callable, List, Optional

import httpx
import structlog

from ..checks.http_probe import PROBE_TIMEOUT_SECONDS, ProbeResult, probe_url
from ..checks.recorder import ResultRecorder
from ..config import ChoqueConfig, TargetConfig
from ..errors import NoTargetsConfiguredError
from ..intervals import format_seconds
from ..probe_log import ProbeLog
from .job_scheduler import JobScheduler

logger = structlog.get_logger(__name__)

ProbeFunc = Callable[..., Awaitable[ProbeResult]]


class ProbeScheduler:
    """Runs every target's probe on its own interval, with no cross-target ordering."""

    def __init__(
        self,
        sink: ProbeLog,
        recorder: Optional[ResultRecorder] = None,
        client: Optional[httpx.AsyncClient] = None,
        probe: ProbeFunc = probe_url,
        timeout_seconds: float = PROBE_TIMEOUT_SECONDS,
        job_scheduler: Optional[JobScheduler] = None,
    ):
        self.sink = sink
        self.recorder = recorder or ResultRecorder(sink)
        self.client = client
        self._owns_client = client is None
        self.probe = probe
        self.timeout_seconds = timeout_seconds
        self.jobs = job_scheduler or JobScheduler()

    async def probe_target(self, url: str) -> ProbeResult:
        """One firing: probe the URL and append its log line."""
        result = await self.probe(url, self.client, timeout_seconds=self.timeout_seconds)
        self.recorder.record(result)
        return result

    async def start(self, config: ChoqueConfig) -> List[str]:
        """Arm one interval job per target and return the job ids."""
        targets: List[TargetConfig] = list(config.urls)
        if not targets:
            raise NoTargetsConfiguredError(
                'No URLs configured. Add URLs using "choque add --url <url> --interval <seconds>".'
            )

        if self.client is None:
            self.client = httpx.AsyncClient()

        await self.jobs.start()

        job_ids = []
        for index, target in enumerate(targets):
            interval_ms = config.resolve_interval(target)
            self.sink.info(f"Starting pings for {target.url} every {format_seconds(interval_ms)}s")

            job_id = f"probe-{index}"
            self.jobs.add_interval_job(
                job_id=job_id,
                func=self.probe_target,
                seconds=interval_ms / 1000,
                args=(target.url,),
                description=f"Probe {target.url}",
            )
            job_ids.append(job_id)

        logger.info("Probe scheduler started", targets=len(job_ids))
        return job_ids

    async def stop(self) -> None:
        """Shut down without draining in-flight probes."""
        await self.jobs.stop()
        if self._owns_client and self.client is not None:
            await self.client.aclose()
            self.client = None
        logger.info("Probe scheduler stopped")

    async def run(self, config: ChoqueConfig) -> None:
        """Start probing and block until the surrounding task is cancelled."""
        await self.start(config)
        try:
            await asyncio.Event().wait()
        finally:
            await self.stop()
