"""Testes do lookup em lote Neynar via httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from api.connectors.neynar.http_client import NeynarHttpClient, create_neynar_http_client
from app.domain.profile import ProfileSnapshot
from app.infra.http import HttpClientConfig, HttpError
from config.settings import NeynarSettings
from utils.errors import ProfileLookupError

ENDPOINT = "https://api.neynar.test/v2/farcaster/user/bulk/"


def _client(handler, max_retries: int = 0) -> NeynarHttpClient:
    config = HttpClientConfig(
        max_retries=max_retries,
        backoff_base_seconds=0,
        transport=httpx.MockTransport(handler),
    )
    return NeynarHttpClient(endpoint=ENDPOINT, api_key="key", config=config)


@pytest.mark.asyncio
async def test_fetch_profiles_sends_one_batched_request() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "users": [
                    {"fid": 3, "username": "alice", "display_name": "Alice", "pfp_url": "https://p/a"},
                    {"fid": 42, "username": "bob", "profile": {"bio": {"text": "hi"}}},
                    {"fid": "x", "username": "broken"},
                ]
            },
        )

    profiles = await _client(handler).fetch_profiles([3, 42])

    assert len(requests) == 1
    assert requests[0].url.params["fids"] == "3,42"
    assert requests[0].headers["x-api-key"] == "key"
    assert profiles == {
        3: ProfileSnapshot(name="alice", display_name="Alice", avatar_ref="https://p/a"),
        42: ProfileSnapshot(name="bob", bio="hi"),
    }


@pytest.mark.asyncio
async def test_records_under_result_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"result": {"users": [{"fid": 7, "username": "carol"}]}})

    profiles = await _client(handler).fetch_profiles([7])

    assert profiles[7].name == "carol"


@pytest.mark.asyncio
async def test_client_error_status_raises_lookup_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "unauthorized"})

    with pytest.raises(ProfileLookupError, match="401"):
        await _client(handler).fetch_profiles([3])


@pytest.mark.asyncio
async def test_server_errors_are_retried_then_raised() -> None:
    attempts = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal attempts
        attempts += 1
        return httpx.Response(503)

    with pytest.raises(HttpError) as exc_info:
        await _client(handler, max_retries=2).fetch_profiles([3])

    assert attempts == 3
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_without_api_key_nothing_is_requested() -> None:
    client = NeynarHttpClient(endpoint=ENDPOINT, api_key="")

    with pytest.raises(ProfileLookupError):
        await client.fetch_profiles([3])


@pytest.mark.asyncio
async def test_empty_ids_return_empty_mapping() -> None:
    assert await NeynarHttpClient(endpoint=ENDPOINT, api_key="k").fetch_profiles([]) == {}


def test_factory_uses_settings() -> None:
    settings = NeynarSettings(api_key="k", api_base_url="https://api.neynar.test/", max_retries=3)

    client = create_neynar_http_client(settings)

    assert client._endpoint == ENDPOINT
    assert client._config.max_retries == 3
