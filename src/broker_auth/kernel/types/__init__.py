"""Kernel types – Result variants."""
from broker_auth.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
