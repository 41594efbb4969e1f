"""
broker_auth – ACL authorization and credential authentication for message brokers.

Import path convention::

    from broker_auth.application.authz import AclAuthorizer
    from broker_auth.application.authn import CredentialAuthenticator
    from broker_auth.application.snapshot import RuleStore
    from broker_auth.adapters.broker import BrokerAuthorizer, BrokerCallbackHandler
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
