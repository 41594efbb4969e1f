"""Application authz – ACL authorization engine."""
from broker_auth.application.authz.authorizer import AclAuthorizer, parse_super_users

__all__ = ["AclAuthorizer", "parse_super_users"]
