"""Application scheduler – periodic snapshot refresh."""
from broker_auth.application.scheduler.job import Job
from broker_auth.application.scheduler.scheduler import (
    JobExecutedEvent,
    JobExecutionContext,
    Scheduler,
)
from broker_auth.application.scheduler.in_memory import InMemoryScheduler
from broker_auth.application.scheduler.apscheduler import APSchedulerAdapter
from broker_auth.application.scheduler.refresher import (
    AclSource,
    CredentialSource,
    RefreshOutcome,
    SnapshotRefresher,
)

__all__ = [
    "APSchedulerAdapter",
    "AclSource",
    "CredentialSource",
    "InMemoryScheduler",
    "Job",
    "JobExecutedEvent",
    "JobExecutionContext",
    "RefreshOutcome",
    "Scheduler",
    "SnapshotRefresher",
]
