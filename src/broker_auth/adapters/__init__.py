"""Adapters – SQLAlchemy store backend and broker plug-ins."""
