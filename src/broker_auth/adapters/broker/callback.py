"""Broker adapter – BrokerCallbackHandler.

Plug-in facade for the broker's plain-credential callback.  Login-module
options::

    user_admin="admin-secret"          # static tier, one entry per user
    enable_db_auth="true"
    db_userTable="kafka_user"
    db_column.name="name"              # optional, default "name"
    db_column.password="password"      # optional, default "password"
    db_sync.interval_second="30"       # optional, default 60
    conn_url="postgresql+asyncpg://broker@db/acl"
    conn_pool_size="5"
    log_decisions="false"              # per-attempt debug lines
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable

from broker_auth.adapters.broker.options import as_bool, as_int, engine_options
from broker_auth.adapters.sqlalchemy import (
    CredentialTableMapping,
    SqlAlchemyCredentialSource,
    SqlAlchemySessionFactory,
)
from broker_auth.application.authn import CredentialAuthenticator, StaticCredentials
from broker_auth.application.scheduler import APSchedulerAdapter, Scheduler, SnapshotRefresher
from broker_auth.application.snapshot import RuleStore
from broker_auth.config.settings import CredentialSettings, SettingsFactory, SettingsLoader
from broker_auth.config.validation import ConfigurationError, MissingRequiredSettingError
from broker_auth.kernel.security import AuthenticationDecision
from broker_auth.observability.logging import get_logger

_log = get_logger(__name__)

ENABLE_DB_AUTH_OPTION = "enable_db_auth"
USER_TABLE_OPTION = "db_userTable"
USERNAME_COLUMN_OPTION = "db_column.name"
PASSWORD_COLUMN_OPTION = "db_column.password"
SYNC_INTERVAL_OPTION = "db_sync.interval_second"
LOG_DECISIONS_OPTION = "log_decisions"
CONN_PREFIX = "conn_"


class BrokerCallbackHandler:
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
        self._authenticator: CredentialAuthenticator | None = None
        self._refresher: SnapshotRefresher | None = None
        self.settings: CredentialSettings | None = None

    @property
    def store(self) -> RuleStore:
        return self._store

    @property
    def refresher(self) -> SnapshotRefresher | None:
        return self._refresher

    def configure(self, options: Mapping[str, Any] | None) -> None:
        if options is None:
            raise ConfigurationError("Login module options must be configured")
        if options.get(ENABLE_DB_AUTH_OPTION) is None:
            raise MissingRequiredSettingError(ENABLE_DB_AUTH_OPTION)

        static = StaticCredentials.from_options(options)
        overrides: dict[str, Any] = {"enable_db_auth": as_bool(options[ENABLE_DB_AUTH_OPTION])}
        if options.get(USER_TABLE_OPTION):
            overrides["table"] = str(options[USER_TABLE_OPTION])
        if options.get(USERNAME_COLUMN_OPTION):
            overrides["username_column"] = str(options[USERNAME_COLUMN_OPTION])
        if options.get(PASSWORD_COLUMN_OPTION):
            overrides["password_column"] = str(options[PASSWORD_COLUMN_OPTION])
        if options.get(SYNC_INTERVAL_OPTION) is not None:
            overrides["sync_interval_seconds"] = as_int(SYNC_INTERVAL_OPTION, options[SYNC_INTERVAL_OPTION])
        if options.get(LOG_DECISIONS_OPTION) is not None:
            overrides["log_decisions"] = as_bool(options[LOG_DECISIONS_OPTION])
        url, engine_kwargs = engine_options(options, CONN_PREFIX)
        if url:
            overrides["database_url"] = url

        settings = SettingsFactory.create(CredentialSettings, loaders=self._loaders, overrides=overrides)
        _log.info(
            "credentials_configured",
            static_users=len(static),
            enable_db_auth=settings.enable_db_auth,
            table=settings.table or None,
        )

        if settings.enable_db_auth:
            self._session_factory = self._session_factory_cls(settings.database_url, **engine_kwargs)
            source = SqlAlchemyCredentialSource(
                self._session_factory,
                CredentialTableMapping(
                    table=settings.table,
                    username=settings.username_column,
                    password=settings.password_column,
                ),
            )
            self._refresher = SnapshotRefresher.for_credentials(self._store, source)
            self._scheduler.add_job(self._refresher.as_job(settings.sync_interval_seconds))

        self._authenticator = CredentialAuthenticator(
            static,
            self._store,
            dynamic_enabled=settings.enable_db_auth,
            log_decisions=settings.log_decisions,
        )
        self.settings = settings

    def _require_authenticator(self) -> CredentialAuthenticator:
        if self._authenticator is None:
            raise ConfigurationError("BrokerCallbackHandler.configure() must be called first")
        return self._authenticator

    async def start(self) -> None:
        self._require_authenticator()
        await self._scheduler.start()

    def authenticate(self, username: str | None, password: str | bytes | None) -> bool:
        return self._require_authenticator().authenticate(username, password)

    def decide(self, username: str | None, password: str | bytes | None) -> AuthenticationDecision:
        return self._require_authenticator().decide(username, password)

    async def close(self) -> None:
        _log.info("credential_handler_closing")
        await self._scheduler.stop()
        if self._session_factory is not None:
            await self._session_factory.dispose()
