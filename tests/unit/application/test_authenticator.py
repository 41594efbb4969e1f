"""Unit tests for CredentialAuthenticator and StaticCredentials."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from broker_auth.application.authn import CredentialAuthenticator, StaticCredentials
from broker_auth.application.snapshot import RuleStore
from broker_auth.kernel.security import AuthenticationDecision, CredentialRecord


def _store(*records: tuple[str, str]) -> RuleStore:
    store = RuleStore()
    store.replace_credentials(CredentialRecord(u, s) for u, s in records)
    return store


class TestStaticCredentials:
    def test_from_options(self) -> None:
        static = StaticCredentials.from_options(
            {"user_admin": "admin-secret", "user_": "ignored", "username": "ignored", "enable_db_auth": "true"}
        )
        assert len(static) == 1
        assert "admin" in static
        assert static.verify("admin", "admin-secret")

    def test_exact_comparison(self) -> None:
        static = StaticCredentials({"admin": "Secret"})
        assert not static.verify("admin", "secret")
        assert not static.verify("admin", "Secret ")
        assert not static.verify("Admin", "Secret")

    def test_repr_hides_secrets(self) -> None:
        assert "pw" not in repr(StaticCredentials({"admin": "pw"}))


class TestStaticTier:
    def test_static_match_wins_regardless_of_dynamic_state(self) -> None:
        store = _store(("admin", "different"))
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw"}), store, dynamic_enabled=True)
        assert auth.authenticate("admin", "pw") is True

    def test_bytes_secret(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw"}))
        assert auth.authenticate("admin", b"pw") is True

    def test_undecodable_bytes_rejected(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw"}))
        assert auth.authenticate("admin", b"\xff\xfe") is False

    def test_lone_surrogate_secret_rejected(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw"}), _store(("bob", "pw")), dynamic_enabled=True)
        assert auth.authenticate("admin", "\ud800") is False
        assert auth.authenticate("bob", "pw\udfff") is False
        assert auth.decide("admin", "\ud800") is AuthenticationDecision.REJECTED

    def test_surrogate_secret_compares_exactly(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw\ud800"}))
        assert auth.authenticate("admin", "pw\ud800") is True

    @pytest.mark.parametrize(("username", "secret"), [(None, "pw"), ("admin", None)])
    def test_missing_inputs_rejected(self, username, secret) -> None:
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw"}))
        assert auth.authenticate(username, secret) is False


class TestDynamicTier:
    def test_disabled_tier_never_consulted(self) -> None:
        class ExplodingStore(RuleStore):
            def find_credential(self, username: str):  # type: ignore[override]
                raise AssertionError("credential snapshot must not be consulted")

        store = ExplodingStore()
        store.replace_credentials([CredentialRecord("alice", "pw")])
        auth = CredentialAuthenticator(StaticCredentials(), store, dynamic_enabled=False)
        assert auth.dynamic_enabled is False
        assert auth.authenticate("alice", "pw") is False

    def test_enabled_tier_matches_snapshot(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials(), _store(("alice", "pw")), dynamic_enabled=True)
        assert auth.authenticate("alice", "pw") is True
        assert auth.authenticate("alice", "nope") is False
        assert auth.authenticate("carol", "pw") is False

    def test_enabled_without_store_is_disabled(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials(), None, dynamic_enabled=True)
        assert auth.dynamic_enabled is False
        assert auth.authenticate("alice", "pw") is False

    def test_lookup_failure_is_a_rejection(self) -> None:
        class BrokenStore(RuleStore):
            def find_credential(self, username: str):  # type: ignore[override]
                raise RuntimeError("corrupted snapshot")

        auth = CredentialAuthenticator(StaticCredentials(), BrokenStore(), dynamic_enabled=True)
        assert auth.authenticate("alice", "pw") is False

    def test_empty_snapshot_before_first_refresh(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials(), RuleStore(), dynamic_enabled=True)
        assert auth.authenticate("alice", "pw") is False

    def test_picks_up_refreshed_snapshot(self) -> None:
        store = RuleStore()
        auth = CredentialAuthenticator(StaticCredentials(), store, dynamic_enabled=True)
        store.replace_credentials([CredentialRecord("alice", "v1")])
        assert auth.authenticate("alice", "v1")
        store.replace_credentials([CredentialRecord("alice", "v2")])
        assert not auth.authenticate("alice", "v1")
        assert auth.authenticate("alice", "v2")


class TestDecide:
    def test_decisions(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw"}))
        assert auth.decide("admin", "pw") is AuthenticationDecision.AUTHENTICATED
        assert auth.decide("admin", "bad") is AuthenticationDecision.REJECTED


class TestDecisionLogging:
    def test_silent_by_default(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw"}))
        with capture_logs() as logs:
            auth.authenticate("admin", "pw")
            auth.authenticate("admin", "bad")
        assert logs == []

    def test_opt_in_never_logs_secrets(self) -> None:
        auth = CredentialAuthenticator(StaticCredentials({"admin": "pw"}), log_decisions=True)
        with capture_logs() as logs:
            auth.authenticate("admin", "pw")
        assert logs == [
            {"event": "authentication_decided", "username": "admin", "tier": "static", "authenticated": True, "log_level": "debug"}
        ]

    def test_lookup_failure_is_always_logged(self) -> None:
        class BrokenStore(RuleStore):
            def find_credential(self, username: str):  # type: ignore[override]
                raise OSError("snapshot unavailable")

        auth = CredentialAuthenticator(StaticCredentials(), BrokenStore(), dynamic_enabled=True)
        with capture_logs() as logs:
            assert auth.authenticate("alice", "pw") is False
        assert [entry["event"] for entry in logs] == ["authentication_lookup_failed"]
