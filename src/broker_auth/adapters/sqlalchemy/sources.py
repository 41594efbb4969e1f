"""SQLAlchemy adapter – ACL and credential sources.

Table and column names come from configuration, so the statements are built
with lightweight ``table()`` / ``column()`` constructs rather than mapped
models.  Each ``load`` opens one scoped session that is released on every
exit path, including cancellation.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable

from sqlalchemy import column, select, table

from broker_auth.kernel.security import AclRule, CredentialRecord
from broker_auth.observability.logging import get_logger

_log = get_logger(__name__)


def _table(name: str, *columns: str) -> Any:
    schema, _, table_name = name.rpartition(".")
    return table(table_name, *(column(c) for c in columns), schema=schema or None)


@dataclasses.dataclass(frozen=True)
class AclTableMapping:
    table: str
    user_pattern: str
    resource_type: str
    resource_pattern: str
    operation: str


@dataclasses.dataclass(frozen=True)
class CredentialTableMapping:
    table: str
    username: str = "name"
    password: str = "password"


class SqlAlchemyAclSource:
    """Loads every ACL row as an :class:`AclRule`."""

    def __init__(self, session_factory: Callable[[], Any], mapping: AclTableMapping) -> None:
        self._session_factory = session_factory
        self._mapping = mapping
        m = mapping
        t = _table(m.table, m.user_pattern, m.resource_type, m.resource_pattern, m.operation)
        self._statement = select(
            t.c[m.user_pattern].label("user_pattern"),
            t.c[m.resource_type].label("resource_type"),
            t.c[m.resource_pattern].label("resource_pattern"),
            t.c[m.operation].label("operation"),
        )

    async def load(self) -> list[AclRule]:
        async with self._session_factory() as session:
            result = await session.execute(self._statement)
            rows = result.mappings().all()

        rules: list[AclRule] = []
        for row in rows:
            if any(row[key] is None for key in ("user_pattern", "resource_type", "resource_pattern", "operation")):
                _log.warning("acl_row_skipped", table=self._mapping.table, row=dict(row))
                continue
            rules.append(
                AclRule.from_row(
                    str(row["user_pattern"]),
                    str(row["resource_type"]),
                    str(row["resource_pattern"]),
                    str(row["operation"]),
                )
            )
        return rules


class SqlAlchemyCredentialSource:
    """Loads every ``(username, password)`` row as a :class:`CredentialRecord`."""

    def __init__(self, session_factory: Callable[[], Any], mapping: CredentialTableMapping) -> None:
        self._session_factory = session_factory
        self._mapping = mapping
        m = mapping
        t = _table(m.table, m.username, m.password)
        self._statement = select(
            t.c[m.username].label("username"),
            t.c[m.password].label("password"),
        )

    async def load(self) -> list[CredentialRecord]:
        async with self._session_factory() as session:
            result = await session.execute(self._statement)
            rows = result.mappings().all()

        records: list[CredentialRecord] = []
        for row in rows:
            if row["username"] is None or row["password"] is None:
                _log.warning("credential_row_skipped", table=self._mapping.table, username=row["username"])
                continue
            records.append(CredentialRecord(username=str(row["username"]), secret=str(row["password"])))
        return records


__all__ = [
    "AclTableMapping",
    "CredentialTableMapping",
    "SqlAlchemyAclSource",
    "SqlAlchemyCredentialSource",
]
