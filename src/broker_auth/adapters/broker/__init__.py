"""Broker adapter – authorizer and credential callback plug-ins."""
from broker_auth.adapters.broker.authorizer import BrokerAuthorizer
from broker_auth.adapters.broker.callback import BrokerCallbackHandler
from broker_auth.adapters.broker.options import engine_options

__all__ = ["BrokerAuthorizer", "BrokerCallbackHandler", "engine_options"]
