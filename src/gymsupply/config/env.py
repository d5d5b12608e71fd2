"""Environment variable readers shared by the config factories."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def optional_env_var(name: str) -> str | None:
    """Return the variable, treating unset and whitespace-only values alike."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise naming every missing one."""

    values = {name: optional_env_var(name) for name in names}
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise MissingConfigurationError(missing)
    return {name: value for name, value in values.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars([name])[name]


def positive_float_env(name: str) -> float | None:
    raw = optional_env_var(name)
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid {name}: {raw!r}", variables=[name]) from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive", variables=[name])
    return value
