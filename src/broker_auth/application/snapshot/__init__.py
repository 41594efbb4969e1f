"""Application snapshot – immutable snapshots and the rule store."""
from broker_auth.application.snapshot.cell import Snapshot, SnapshotCell
from broker_auth.application.snapshot.store import RuleStore

__all__ = ["RuleStore", "Snapshot", "SnapshotCell"]
