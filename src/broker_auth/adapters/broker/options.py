"""Broker adapter – helpers for flat, string-valued broker configuration."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from broker_auth.config.validation import InvalidSettingValueError

__all__ = ["as_bool", "as_int", "engine_options"]


def _coerce(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    text = value.strip()
    if text.lower() in ("true", "false"):
        return text.lower() == "true"
    if text.lstrip("-").isdigit():
        return int(text)
    return text


def engine_options(configs: Mapping[str, Any], prefix: str) -> tuple[str | None, dict[str, Any]]:
    """Split ``<prefix>url`` from the remaining ``<prefix>*`` engine options.

    ``{"my.db.conn.url": "...", "my.db.conn.pool_size": "5"}`` with prefix
    ``"my.db.conn."`` yields ``("...", {"pool_size": 5})``.
    """
    url: str | None = None
    kwargs: dict[str, Any] = {}
    for key, value in configs.items():
        if not key.startswith(prefix):
            continue
        option = key[len(prefix):]
        if option == "url":
            url = str(value)
        elif option:
            kwargs[option] = _coerce(value)
    return url, kwargs


def as_int(name: str, value: Any) -> int:
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise InvalidSettingValueError(name, value, "must be an integer") from exc


def as_bool(value: Any) -> bool:
    return str(value).strip().lower() == "true"
