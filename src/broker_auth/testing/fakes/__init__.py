"""Testing fakes – in-memory doubles for ACL and credential sources."""
from broker_auth.testing.fakes.sources import InMemoryAclSource, InMemoryCredentialSource

__all__ = ["InMemoryAclSource", "InMemoryCredentialSource"]
