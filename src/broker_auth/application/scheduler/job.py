"""Application scheduler – Job dataclass."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

__all__ = ["Job"]


@dataclass
class Job:
    """Describes a periodic job."""

    id: str
    name: str
    handler: Callable[[], Awaitable[Any]]
    interval_seconds: int
    enabled: bool = True
    run_immediately: bool = False    # first run at start instead of after one period

    def __post_init__(self) -> None:
        if self.interval_seconds < 1:
            raise ValueError("'interval_seconds' must be at least 1")
