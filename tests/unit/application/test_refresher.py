"""Unit tests for SnapshotRefresher – fail-static refresh cycles."""
from __future__ import annotations

import asyncio

from broker_auth.application.scheduler import (
    AclSource,
    CredentialSource,
    InMemoryScheduler,
    SnapshotRefresher,
)
from broker_auth.application.snapshot import RuleStore
from broker_auth.kernel.errors import RefreshError
from broker_auth.kernel.security import AclRule, CredentialRecord
from broker_auth.testing.fakes import InMemoryAclSource, InMemoryCredentialSource


def _rules(*users: str) -> list[AclRule]:
    return [AclRule.from_row(u, "TOPIC", "*", "READ") for u in users]


class TestSnapshotRefresher:
    def test_fakes_satisfy_ports(self) -> None:
        assert isinstance(InMemoryAclSource(), AclSource)
        assert isinstance(InMemoryCredentialSource(), CredentialSource)

    def test_successful_refresh_installs_snapshot(self) -> None:
        store = RuleStore()
        refresher = SnapshotRefresher.for_rules(store, InMemoryAclSource(_rules("a", "b")))
        outcome = asyncio.run(refresher.refresh())
        assert outcome.success
        assert outcome.snapshot == "acl"
        assert outcome.count == 2
        assert outcome.generation == 1
        assert [r.user_pattern for r in store.current_rules().items] == ["a", "b"]

    def test_failed_refresh_retains_previous_snapshot(self) -> None:
        store = RuleStore()
        source = InMemoryAclSource(_rules("a"))
        refresher = SnapshotRefresher.for_rules(store, source)
        asyncio.run(refresher.refresh())
        before = store.current_rules()

        source.fail_with(ConnectionRefusedError("db down"))
        outcome = asyncio.run(refresher.refresh())

        assert outcome.success is False
        assert isinstance(outcome.error, RefreshError)
        assert isinstance(outcome.error.cause, ConnectionRefusedError)
        assert outcome.generation == 1
        assert store.current_rules() is before
        assert refresher.failures == 1
        assert refresher.last_outcome is outcome

    def test_failure_before_first_load_keeps_empty_snapshot(self) -> None:
        store = RuleStore()
        source = InMemoryAclSource()
        source.fail_with(TimeoutError("query timeout"))
        outcome = asyncio.run(SnapshotRefresher.for_rules(store, source).refresh())
        assert outcome.success is False
        assert store.current_rules().items == ()
        assert store.current_rules().generation == 0

    def test_recovers_on_next_cycle(self) -> None:
        store = RuleStore()
        source = InMemoryAclSource()
        source.fail_with(OSError("boom"))
        refresher = SnapshotRefresher.for_rules(store, source)
        asyncio.run(refresher.refresh())
        source.set_rows(_rules("c"))
        outcome = asyncio.run(refresher.refresh())
        assert outcome.success
        assert store.current_rules().items[0].user_pattern == "c"

    def test_credentials_refresh(self) -> None:
        store = RuleStore()
        source = InMemoryCredentialSource([CredentialRecord("alice", "pw")])
        outcome = asyncio.run(SnapshotRefresher.for_credentials(store, source).refresh())
        assert outcome.snapshot == "credentials"
        assert store.find_credential("alice").secret == "pw"  # type: ignore[union-attr]
        assert store.current_rules().generation == 0

    def test_as_job_runs_immediately(self) -> None:
        async def _run() -> None:
            store = RuleStore()
            source = InMemoryAclSource(_rules("a"))
            refresher = SnapshotRefresher.for_rules(store, source)
            job = refresher.as_job(30)
            assert job.id == "refresh-acl"
            assert job.interval_seconds == 30
            assert job.run_immediately is True

            scheduler = InMemoryScheduler()
            scheduler.add_job(job)
            await scheduler.start()
            assert source.calls == 1
            assert store.current_rules().is_initialized
            await scheduler.trigger(job.id)
            assert store.current_rules().generation == 2

        asyncio.run(_run())

    def test_job_never_reports_failure_to_scheduler(self) -> None:
        async def _run() -> None:
            source = InMemoryAclSource()
            source.fail_with(RuntimeError("mapping error"))
            refresher = SnapshotRefresher.for_rules(RuleStore(), source)
            scheduler = InMemoryScheduler()
            scheduler.add_job(refresher.as_job(5))
            event = await scheduler.trigger("refresh-acl")
            assert event.success is True
            assert refresher.failures == 1

        asyncio.run(_run())
