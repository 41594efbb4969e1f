"""Application authn – two-tier credential authentication."""
from broker_auth.application.authn.authenticator import CredentialAuthenticator
from broker_auth.application.authn.static import StaticCredentials

__all__ = ["CredentialAuthenticator", "StaticCredentials"]
