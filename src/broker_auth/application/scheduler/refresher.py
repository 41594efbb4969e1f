"""Application scheduler – SnapshotRefresher.

One refresh cycle loads every row from a source, builds a complete snapshot
off to the side, then publishes it into the :class:`RuleStore`.  A failed
cycle leaves the previous snapshot authoritative and is retried on the next
tick.
"""
from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from broker_auth.application.scheduler.job import Job
from broker_auth.application.snapshot import RuleStore, Snapshot
from broker_auth.kernel.errors import RefreshError
from broker_auth.kernel.security import AclRule, CredentialRecord
from broker_auth.observability.logging import get_logger

__all__ = ["AclSource", "CredentialSource", "RefreshOutcome", "SnapshotRefresher"]

_log = get_logger(__name__)


@runtime_checkable
class AclSource(Protocol):
    """Port: load every ACL rule from the system of record."""

    async def load(self) -> list[AclRule]: ...


@runtime_checkable
class CredentialSource(Protocol):
    """Port: load every credential record from the system of record."""

    async def load(self) -> list[CredentialRecord]: ...


@dataclass(frozen=True)
class RefreshOutcome:
    snapshot: str
    generation: int
    count: int = 0
    duration_ms: float = 0.0
    error: RefreshError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class SnapshotRefresher:
    """Refresh task for one snapshot kind (``"acl"`` or ``"credentials"``)."""

    def __init__(
        self,
        name: str,
        load: Callable[[], Any],
        install: Callable[[Iterable[Any]], Snapshot[Any]],
        current_generation: Callable[[], int],
    ) -> None:
        self._name = name
        self._load = load
        self._install = install
        self._current_generation = current_generation
        self.failures = 0
        self.last_outcome: RefreshOutcome | None = None

    @classmethod
    def for_rules(cls, store: RuleStore, source: AclSource) -> "SnapshotRefresher":
        return cls(
            "acl",
            source.load,
            store.replace_rules,
            lambda: store.current_rules().generation,
        )

    @classmethod
    def for_credentials(cls, store: RuleStore, source: CredentialSource) -> "SnapshotRefresher":
        return cls(
            "credentials",
            source.load,
            store.replace_credentials,
            lambda: store.current_credentials().generation,
        )

    @property
    def name(self) -> str:
        return self._name

    async def refresh(self) -> RefreshOutcome:
        t0 = time.monotonic()
        try:
            rows = list(await self._load())
            snapshot = self._install(rows)
        except Exception as exc:  # noqa: BLE001
            self.failures += 1
            error = RefreshError(self._name, cause=exc)
            outcome = RefreshOutcome(
                snapshot=self._name,
                generation=self._current_generation(),
                duration_ms=(time.monotonic() - t0) * 1000,
                error=error,
            )
            _log.error(
                "refresh_failed",
                snapshot=self._name,
                retained_generation=outcome.generation,
                failures=self.failures,
                error=repr(exc),
            )
        else:
            outcome = RefreshOutcome(
                snapshot=self._name,
                generation=snapshot.generation,
                count=len(rows),
                duration_ms=(time.monotonic() - t0) * 1000,
            )
            _log.debug(
                "refresh_succeeded",
                snapshot=self._name,
                generation=snapshot.generation,
                count=outcome.count,
            )
        self.last_outcome = outcome
        return outcome

    def as_job(self, interval_seconds: int) -> Job:
        """Wrap this refresher as a periodic job whose first run is immediate."""
        return Job(
            id=f"refresh-{self._name}",
            name=f"Refresh {self._name} snapshot",
            handler=self.refresh,
            interval_seconds=interval_seconds,
            run_immediately=True,
        )
