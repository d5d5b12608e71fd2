"""Async HTTP client with retries, rate limiting and an optional response cache.

Retries are handled by ``httpx_retries`` at the transport level, the rate limit
by ``aiolimiter`` around each call and caching by ``hishel``.
"""

from __future__ import annotations

import json
from contextlib import AbstractAsyncContextManager, nullcontext
from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from gymsupply.config.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    ShouldCacheHook,
)
from gymsupply.config.storage import get_storage_config

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class JsonPayloadFilter(BaseFilter[HishelCacheResponse]):
    """Hishel response filter asking a predicate about the decoded JSON body.

    Bodies that are not JSON are never stored.
    """

    def __init__(self, predicate: ShouldCacheHook) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if body is None:
            return True
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))


def build_cache(config: CacheConfig) -> tuple[AsyncSqliteStorage, FilterPolicy]:
    """Return hishel storage and a filter policy for ``config``.

    The filter policy stores responses regardless of upstream cache headers;
    ``ttl_seconds`` alone bounds their age.
    """

    if config.backend == "sqlite":
        database_path = config.sqlite_path or str(get_storage_config().http_cache_path())
    elif config.backend == "memory":
        database_path = ":memory:"
    else:
        raise ValueError(f"Unsupported cache backend: {config.backend}")

    storage = AsyncSqliteStorage(
        database_path=database_path,
        default_ttl=config.ttl_seconds,
        refresh_ttl_on_access=False,
    )
    response_filters: list[BaseFilter[HishelCacheResponse]] = []
    if config.should_cache is not None:
        response_filters.append(JsonPayloadFilter(config.should_cache))
    return storage, FilterPolicy(response_filters=response_filters)


def _build_client(config: ResilienceConfig) -> httpx.AsyncClient:
    options: dict[str, Any] = {
        "timeout": config.timeout_seconds,
        "transport": RetryTransport(retry=build_retry(config.retry)),
    }
    if config.base_url is not None:
        options["base_url"] = config.base_url
    if config.default_headers:
        options["headers"] = dict(config.default_headers)
    if config.cache is None:
        return httpx.AsyncClient(**options)
    storage, policy = build_cache(config.cache)
    return AsyncCacheClient(storage=storage, policy=policy, **options)


class ResilientClient:
    """Async context manager issuing rate-limited, retried GET requests."""

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit is not None
            else None
        )
        self._client = _build_client(config)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _slot(self) -> AbstractAsyncContextManager[object]:
        return self._limiter if self._limiter is not None else nullcontext()

    async def get(
        self,
        url: str | httpx.URL,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        follow_redirects: bool = False,
    ) -> httpx.Response:
        async with self._slot():
            return await self._client.get(
                url,
                params=params,
                headers=headers,
                follow_redirects=follow_redirects,
            )
