"""Application authn – CredentialAuthenticator.

Two tiers, short-circuiting on success:

1. the static table supplied by configuration;
2. the credential snapshot of the :class:`RuleStore`, only when enabled.

Nothing raised while consulting the second tier reaches the caller; it is
logged and treated as a rejection.  Per-attempt ``authentication_decided``
lines are only emitted with ``log_decisions=True``.
"""
from __future__ import annotations

from broker_auth.application.authn.static import StaticCredentials, secrets_equal
from broker_auth.application.snapshot import RuleStore
from broker_auth.kernel.errors import AuthenticationLookupError
from broker_auth.kernel.security import AuthenticationDecision
from broker_auth.observability.logging import get_logger

__all__ = ["CredentialAuthenticator"]

_log = get_logger(__name__)


class CredentialAuthenticator:
    def __init__(
        self,
        static: StaticCredentials | None = None,
        store: RuleStore | None = None,
        *,
        dynamic_enabled: bool = False,
        log_decisions: bool = False,
    ) -> None:
        self._static = static or StaticCredentials()
        self._store = store
        self._dynamic_enabled = dynamic_enabled and store is not None
        self._log_decisions = log_decisions

    @property
    def dynamic_enabled(self) -> bool:
        return self._dynamic_enabled

    def authenticate(self, username: str | None, secret: str | bytes | None) -> bool:
        if username is None or secret is None:
            return False
        if isinstance(secret, (bytes, bytearray)):
            try:
                secret = bytes(secret).decode("utf-8")
            except UnicodeDecodeError:
                return self._decided(username, "none", False)

        if self._static.verify(username, secret):
            return self._decided(username, "static", True)
        if not self._dynamic_enabled:
            return self._decided(username, "static", False)

        try:
            authenticated = self._verify_dynamic(username, secret)
        except Exception as exc:  # noqa: BLE001
            error = AuthenticationLookupError(username, cause=exc)
            _log.error("authentication_lookup_failed", username=username, error=error.to_dict())
            return False
        return self._decided(username, "dynamic", authenticated)

    def _decided(self, username: str, tier: str, authenticated: bool) -> bool:
        if self._log_decisions:
            _log.debug("authentication_decided", username=username, tier=tier, authenticated=authenticated)
        return authenticated

    def _verify_dynamic(self, username: str, secret: str) -> bool:
        record = self._store.find_credential(username)  # type: ignore[union-attr]
        if record is None:
            return False
        return secrets_equal(secret, record.secret)

    def decide(self, username: str | None, secret: str | bytes | None) -> AuthenticationDecision:
        if self.authenticate(username, secret):
            return AuthenticationDecision.AUTHENTICATED
        return AuthenticationDecision.REJECTED
