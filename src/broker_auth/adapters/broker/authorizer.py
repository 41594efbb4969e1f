"""Broker adapter – BrokerAuthorizer.

Plug-in facade for the broker's authorizer hook.  Broker configuration::

    super.users=admin;ops
    my.acl.table=kafka_acl
    my.acl.column.user_pattern=user_pattern
    my.acl.column.resource_type=resource_type
    my.acl.column.resource_pattern=resource_pattern
    my.acl.column.operation=operation
    my.acl.sync.interval_second=30
    my.acl.log_decisions=false
    my.db.conn.url=postgresql+asyncpg://broker@db/acl
    my.db.conn.pool_size=5

``my.db.conn.*`` entries other than ``url`` are passed to the SQLAlchemy
engine.  The ACL cache is read-only; ACL mutation requests are refused.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable

from broker_auth.adapters.broker.options import as_bool, as_int, engine_options
from broker_auth.adapters.sqlalchemy import (
    AclTableMapping,
    SqlAlchemyAclSource,
    SqlAlchemySessionFactory,
)
from broker_auth.application.authz import AclAuthorizer, parse_super_users
from broker_auth.application.scheduler import APSchedulerAdapter, Scheduler, SnapshotRefresher
from broker_auth.application.snapshot import RuleStore
from broker_auth.config.settings import AclSettings, SettingsFactory, SettingsLoader
from broker_auth.config.validation import ConfigurationError
from broker_auth.kernel.errors import UnsupportedOperationError, UnsupportedRequestError
from broker_auth.kernel.security import (
    AclOperation,
    Action,
    AuthorizationDecision,
    PatternMatcher,
    PatternType,
    ResourceType,
)
from broker_auth.kernel.types import Result
from broker_auth.observability.logging import get_logger

_log = get_logger(__name__)

SUPER_USERS_PROP = "super.users"
ACL_TABLE_PROP = "my.acl.table"
ACL_COLUMN_PREFIX = "my.acl.column."
ACL_SYNC_INTERVAL_PROP = "my.acl.sync.interval_second"
ACL_CASE_SENSITIVE_PROP = "my.acl.case_sensitive"
ACL_LOG_DECISIONS_PROP = "my.acl.log_decisions"
DB_CONN_PREFIX = "my.db.conn."

_COLUMN_FIELDS = {
    "user_pattern": "user_pattern_column",
    "resource_type": "resource_type_column",
    "resource_pattern": "resource_pattern_column",
    "operation": "operation_column",
}


class BrokerAuthorizer:
    def __init__(
        self,
        *,
        scheduler: Scheduler | None = None,
        store: RuleStore | None = None,
        session_factory_cls: Callable[..., Any] = SqlAlchemySessionFactory,
        loaders: Sequence[SettingsLoader] | None = None,
    ) -> None:
        self._scheduler: Scheduler = scheduler or APSchedulerAdapter()
        self._store = store or RuleStore()
        self._session_factory_cls = session_factory_cls
        self._loaders = loaders
        self._session_factory: Any | None = None
        self._authorizer: AclAuthorizer | None = None
        self._refresher: SnapshotRefresher | None = None
        self.settings: AclSettings | None = None

    @property
    def store(self) -> RuleStore:
        return self._store

    @property
    def refresher(self) -> SnapshotRefresher | None:
        return self._refresher

    def configure(self, configs: Mapping[str, Any]) -> None:
        """Validate *configs* and wire the refresh job.

        Raises :class:`ConfigurationError` when the table or column mapping,
        or the connection URL, is missing.
        """
        overrides: dict[str, Any] = {}
        if configs.get(ACL_TABLE_PROP):
            overrides["table"] = str(configs[ACL_TABLE_PROP])
        for column_key, field_name in _COLUMN_FIELDS.items():
            value = configs.get(ACL_COLUMN_PREFIX + column_key)
            if value:
                overrides[field_name] = str(value)
        if configs.get(ACL_SYNC_INTERVAL_PROP) is not None:
            overrides["sync_interval_seconds"] = as_int(ACL_SYNC_INTERVAL_PROP, configs[ACL_SYNC_INTERVAL_PROP])
        if configs.get(ACL_CASE_SENSITIVE_PROP) is not None:
            overrides["case_sensitive"] = as_bool(configs[ACL_CASE_SENSITIVE_PROP])
        if configs.get(ACL_LOG_DECISIONS_PROP) is not None:
            overrides["log_decisions"] = as_bool(configs[ACL_LOG_DECISIONS_PROP])
        overrides["super_users"] = str(configs.get(SUPER_USERS_PROP) or "")
        url, engine_kwargs = engine_options(configs, DB_CONN_PREFIX)
        if url:
            overrides["database_url"] = url

        try:
            settings = SettingsFactory.create(AclSettings, loaders=self._loaders, overrides=overrides)
        except ConfigurationError:
            _log.error("acl_configuration_invalid", provided=sorted(overrides))
            raise

        superusers = parse_super_users(settings.super_users)
        _log.info(
            "acl_configured",
            table=settings.table,
            sync_interval_seconds=settings.sync_interval_seconds,
            superusers=sorted(superusers),
        )
        self._session_factory = self._session_factory_cls(settings.database_url, **engine_kwargs)
        source = SqlAlchemyAclSource(
            self._session_factory,
            AclTableMapping(
                table=settings.table,
                user_pattern=settings.user_pattern_column,
                resource_type=settings.resource_type_column,
                resource_pattern=settings.resource_pattern_column,
                operation=settings.operation_column,
            ),
        )
        self._refresher = SnapshotRefresher.for_rules(self._store, source)
        self._scheduler.add_job(self._refresher.as_job(settings.sync_interval_seconds))
        self._authorizer = AclAuthorizer(
            self._store,
            superusers=superusers,
            matcher=PatternMatcher(case_sensitive=settings.case_sensitive),
            log_decisions=settings.log_decisions,
        )
        self.settings = settings

    def _require_authorizer(self) -> AclAuthorizer:
        if self._authorizer is None:
            raise ConfigurationError("BrokerAuthorizer.configure() must be called first")
        return self._authorizer

    async def start(self) -> None:
        """Start periodic refresh; the first refresh is scheduled immediately."""
        self._require_authorizer()
        await self._scheduler.start()

    def decide(
        self,
        principal: str,
        resource_type: ResourceType,
        resource_name: str,
        operation: AclOperation,
        pattern_type: PatternType = PatternType.LITERAL,
    ) -> Result[AuthorizationDecision, UnsupportedRequestError]:
        return self._require_authorizer().decide(principal, resource_type, resource_name, operation, pattern_type)

    def authorize(self, principal: str, actions: Iterable[Action]) -> list[AuthorizationDecision]:
        """Broker-facing batch call.

        Raises :class:`UnsupportedRequestError` for a non-literal resource,
        as the broker's authorizer contract expects.
        """
        return [result.unwrap() for result in self._require_authorizer().authorize_all(principal, actions)]

    def create_acls(self, *args: Any, **kwargs: Any) -> Any:  # noqa: ARG002
        raise UnsupportedOperationError("ACLs are managed in the database, not through the broker")

    def delete_acls(self, *args: Any, **kwargs: Any) -> Any:  # noqa: ARG002
        raise UnsupportedOperationError("ACLs are managed in the database, not through the broker")

    def acls(self, *args: Any, **kwargs: Any) -> Any:  # noqa: ARG002
        raise UnsupportedOperationError("Listing ACLs is not supported")

    async def close(self) -> None:
        _log.info("acl_authorizer_closing")
        await self._scheduler.stop()
        if self._session_factory is not None:
            await self._session_factory.dispose()
