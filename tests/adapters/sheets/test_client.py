from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from gymsupply.adapters.http_resilience import ResilienceConfig, ResilientClient
from gymsupply.adapters.sheets import SheetsAPIError, SheetsCatalogFetcher
from gymsupply.config import MissingConfigurationError, SheetsConfig

EXPORT_URL = "https://script.example.com/macros/s/abc/exec"


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


def _fetcher(handler: Callable[[httpx.Request], httpx.Response]) -> SheetsCatalogFetcher:
    return SheetsCatalogFetcher(
        config=SheetsConfig(export_url=EXPORT_URL, resilience=ResilienceConfig(name="sheets")),
        client_factory=_make_client_factory(handler),
    )


def test_fetch_parses_rows() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json=[
                {
                    "EXOS Part Number": "A1",
                    "Item Name": "Flat Bench",
                    "Brand": "Rogue",
                    "Category": "Benches",
                    "Cost": 100.0,
                    "Preferred": "P",
                    "URL": "https://example.com/bench",
                    "Notes": "floor model",
                },
                {"EXOS Part Number": "A2", "Item Name": ""},
            ],
        )

    records = _fetcher(handler)()

    assert [str(request.url) for request in requests] == [EXPORT_URL]
    (record,) = records
    assert record.key == "A1"
    assert record.name == "Flat Bench"
    assert record.cost == "100"
    assert record.extras == {"Notes": "floor model"}


def test_follows_apps_script_redirect() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "script.example.com":
            return httpx.Response(302, headers={"Location": "https://content.example.com/echo"})
        return httpx.Response(200, json=[{"Part Number": "A1", "Name": "Bench"}])

    records = _fetcher(handler)()

    assert [record.key for record in records] == ["A1"]


def test_error_payload_raises() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "Sheet 'Equipment' not found"})

    with pytest.raises(SheetsAPIError, match="not found"):
        _fetcher(handler)()


def test_unexpected_payload_raises() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"rows": []})

    with pytest.raises(SheetsAPIError, match="Unexpected"):
        _fetcher(handler)()


def test_http_errors_propagate() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="forbidden")

    with pytest.raises(httpx.HTTPStatusError):
        _fetcher(handler)()


def test_default_config_requires_export_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GYMSUPPLY_SHEETS_EXPORT_URL", raising=False)

    with pytest.raises(MissingConfigurationError):
        SheetsCatalogFetcher()
