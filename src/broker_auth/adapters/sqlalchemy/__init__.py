"""SQLAlchemy adapter – session factory and ACL / credential sources."""
from broker_auth.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from broker_auth.adapters.sqlalchemy.sources import (
    AclTableMapping,
    CredentialTableMapping,
    SqlAlchemyAclSource,
    SqlAlchemyCredentialSource,
)

__all__ = [
    "AclTableMapping",
    "CredentialTableMapping",
    "SqlAlchemyAclSource",
    "SqlAlchemyCredentialSource",
    "SqlAlchemySessionFactory",
]
