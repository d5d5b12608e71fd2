"""Spreadsheet export configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import positive_float_env, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

SHEETS_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class SheetsConfig:
    """Where to fetch the authoritative item list from."""

    export_url: str
    resilience: ResilienceConfig


def _timeout_from_environment() -> float:
    timeout = positive_float_env("GYMSUPPLY_SHEETS_TIMEOUT")
    return SHEETS_TIMEOUT_SECONDS if timeout is None else timeout


def is_row_list(payload: object) -> bool:
    """Only successful exports (a JSON list of rows) may be cached."""

    return isinstance(payload, list)


def _cache_from_environment() -> CacheConfig | None:
    # Off unless asked for: a cached export can hide edits made to the sheet.
    ttl = positive_float_env("GYMSUPPLY_SHEETS_CACHE_TTL")
    if ttl is None:
        return None
    return CacheConfig(backend="sqlite", ttl_seconds=ttl, should_cache=is_row_list)


def get_sheets_config(*, resilience: ResilienceConfig | None = None) -> SheetsConfig:
    values = require_env_vars(("GYMSUPPLY_SHEETS_EXPORT_URL",))
    return SheetsConfig(
        export_url=values["GYMSUPPLY_SHEETS_EXPORT_URL"],
        resilience=resilience
        or ResilienceConfig(
            name="sheets",
            timeout_seconds=_timeout_from_environment(),
            ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
            retry=RetryPolicy(),
            cache=_cache_from_environment(),
        ),
    )
