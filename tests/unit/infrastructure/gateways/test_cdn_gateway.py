from __future__ import annotations

import httpx
import pytest

from cdnrelay.domain.entities.manifest import DeliveryMode
from cdnrelay.infrastructure.gateways.cdn_gateway import HttpCdnGateway


class _StubResponse:
    def __init__(self, status_code: int, json_data):
        self.status_code = status_code
        self._json = json_data

    def json(self):
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "http://relay/api/manifest.json")
            response = httpx.Response(self.status_code, request=request, text="error")
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, response: _StubResponse | None = None, error=None):
        self._response = response
        self._error = error
        self.urls = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, headers: dict):
        self.urls.append(url)
        if self._error is not None:
            raise self._error
        return self._response


@pytest.mark.asyncio
async def test_get_alive_origin(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(200, {"url": "http://stage.cdn.ai"}))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    gateway = HttpCdnGateway("http://relay:3000/")

    assert await gateway.get_alive_origin() == "http://stage.cdn.ai"
    assert client.urls == ["http://relay:3000/api/alive-cdn.json"]


@pytest.mark.asyncio
async def test_get_alive_origin_null(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(200, {"url": None}))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    assert await HttpCdnGateway("http://relay").get_alive_origin() is None


@pytest.mark.asyncio
async def test_get_manifest_parses_entries(monkeypatch) -> None:
    payload = [
        {"hashed": "app-0123456789ab.js", "critical": True, "mode": "defer"},
        {"hashed": "logo.png", "critical": False, "mode": "sync", "priority": 2},
    ]
    client = _StubAsyncClient(_StubResponse(200, payload))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    entries = await HttpCdnGateway("http://relay").get_manifest()

    assert [e.asset_id for e in entries] == ["app-0123456789ab.js", "logo.png"]
    assert entries[0].mode is DeliveryMode.DEFER


@pytest.mark.asyncio
async def test_http_error_is_raised(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(500, {}))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    with pytest.raises(Exception, match="HTTP 500"):
        await HttpCdnGateway("http://relay").get_manifest()


@pytest.mark.asyncio
async def test_request_error_is_raised(monkeypatch) -> None:
    client = _StubAsyncClient(error=httpx.ConnectError("refused"))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    with pytest.raises(Exception, match="Failed to communicate"):
        await HttpCdnGateway("http://relay").get_alive_origin()


@pytest.mark.asyncio
async def test_unexpected_payload_shape_is_rejected(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(200, {"not": "a list"}))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    with pytest.raises(Exception, match="Unexpected manifest payload"):
        await HttpCdnGateway("http://relay").get_manifest()
