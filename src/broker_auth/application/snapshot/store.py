"""Application snapshot – RuleStore.

Holds the current ACL rule snapshot and, independently, the current
credential snapshot.  Both start empty so that authorization falls back to
default-deny before the first refresh completes.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from broker_auth.application.snapshot.cell import Snapshot, SnapshotCell
from broker_auth.kernel.security import AclRule, CredentialRecord

__all__ = ["RuleStore"]


class RuleStore:
    """Atomically swappable rule and credential snapshots."""

    def __init__(self) -> None:
        self._rules: SnapshotCell[tuple[AclRule, ...]] = SnapshotCell(())
        self._credentials: SnapshotCell[Mapping[str, CredentialRecord]] = SnapshotCell(
            MappingProxyType({})
        )

    # -- read side ---------------------------------------------------------

    def current_rules(self) -> Snapshot[tuple[AclRule, ...]]:
        return self._rules.current()

    def current_credentials(self) -> Snapshot[Mapping[str, CredentialRecord]]:
        return self._credentials.current()

    def find_credential(self, username: str) -> CredentialRecord | None:
        return self._credentials.current().items.get(username)

    # -- write side --------------------------------------------------------

    def replace_rules(self, rules: Iterable[AclRule]) -> Snapshot[tuple[AclRule, ...]]:
        """Install *rules* as a new snapshot, preserving their order."""
        return self._rules.replace(tuple(rules))

    def replace_credentials(
        self, records: Iterable[CredentialRecord]
    ) -> Snapshot[Mapping[str, CredentialRecord]]:
        """Install *records* keyed by username; the first row for a name wins."""
        by_name: dict[str, CredentialRecord] = {}
        for record in records:
            by_name.setdefault(record.username, record)
        return self._credentials.replace(MappingProxyType(by_name))

    def __repr__(self) -> str:
        rules = self._rules.current()
        creds = self._credentials.current()
        return (
            f"RuleStore(rules={len(rules.items)}@{rules.generation}, "
            f"credentials={len(creds.items)}@{creds.generation})"
        )
