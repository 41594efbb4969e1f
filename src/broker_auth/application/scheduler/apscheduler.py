"""Application scheduler – APSchedulerAdapter (APScheduler 3.x, asyncio)."""
from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from broker_auth.application.scheduler.job import Job
from broker_auth.application.scheduler.scheduler import JobExecutedEvent, JobExecutionContext
from broker_auth.observability.logging import get_logger

__all__ = ["APSchedulerAdapter"]

_log = get_logger(__name__)


class APSchedulerAdapter:
    """Scheduler backed by APScheduler's ``AsyncIOScheduler``.

    Each job runs at most once at a time; missed runs are coalesced and
    still fire however late the loop gets to them.
    ``stop`` does not wait: pending runs are dropped and in-flight
    coroutines are cancelled.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, Job] = {}
        self._scheduler: AsyncIOScheduler | None = None
        self.last_events: dict[str, JobExecutedEvent] = {}

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def add_job(self, job: Job) -> None:
        self._jobs[job.id] = job
        if self.is_running and job.enabled:
            self._register_job(job)

    def remove_job(self, job_id: str) -> None:
        self._jobs.pop(job_id, None)
        if self.is_running and self._scheduler.get_job(job_id) is not None:  # type: ignore[union-attr]
            self._scheduler.remove_job(job_id)  # type: ignore[union-attr]

    async def start(self) -> None:
        if self.is_running:
            return
        self._scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop(), timezone=UTC)
        for job in self._jobs.values():
            if job.enabled:
                self._register_job(job)
        self._scheduler.start()
        _log.info("scheduler_started", jobs=sorted(self._jobs))

    def _register_job(self, job: Job) -> None:
        async def _handler() -> None:
            event = await JobExecutionContext(job=job).run()
            self.last_events[job.id] = event

        trigger = IntervalTrigger(seconds=job.interval_seconds, timezone=UTC)

        extra: dict[str, Any] = {}
        if job.run_immediately:
            extra["next_run_time"] = datetime.now(UTC)

        self._scheduler.add_job(  # type: ignore[union-attr]
            _handler,
            trigger=trigger,
            id=job.id,
            name=job.name,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=None,
            replace_existing=True,
            **extra,
        )

    async def stop(self) -> None:
        if not self.is_running:
            return
        self._scheduler.shutdown(wait=False)  # type: ignore[union-attr]
        # shutdown is dispatched onto the loop; let it run before returning
        await asyncio.sleep(0)
        _log.info("scheduler_stopped")

    def list_jobs(self) -> list[Job]:
        return list(self._jobs.values())
