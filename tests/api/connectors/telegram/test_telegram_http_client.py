"""Testes do cliente Telegram via httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from api.connectors.telegram.http_client import TelegramHttpClient, create_telegram_http_client
from app.infra.http import HttpClientConfig
from config.settings import TelegramSettings
from utils.errors import NotificationDeliveryError

ENDPOINT = "https://api.telegram.test/botTOKEN/sendMessage"


def _client(handler) -> TelegramHttpClient:
    config = HttpClientConfig(max_retries=0, transport=httpx.MockTransport(handler))
    return TelegramHttpClient(endpoint=ENDPOINT, config=config)


@pytest.mark.asyncio
async def test_send_message_posts_html_without_preview() -> None:
    captured: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(json.loads(request.content))
        return httpx.Response(200, json={"ok": True, "result": {"message_id": 1}})

    body = await _client(handler).send_message("123", "<b>hi</b>")

    assert body["ok"] is True
    assert captured == [
        {
            "chat_id": "123",
            "text": "<b>hi</b>",
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }
    ]


@pytest.mark.asyncio
async def test_rejected_message_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"})

    with pytest.raises(NotificationDeliveryError, match="400"):
        await _client(handler).send_message("123", "hi")


@pytest.mark.asyncio
async def test_non_json_response_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    with pytest.raises(NotificationDeliveryError):
        await _client(handler).send_message("123", "hi")


def test_factory_requires_token() -> None:
    with pytest.raises(ValueError):
        create_telegram_http_client(TelegramSettings())


def test_factory_builds_bot_endpoint() -> None:
    client = create_telegram_http_client(
        TelegramSettings(bot_token="TOKEN", api_base_url="https://api.telegram.test")
    )
    assert client._endpoint == ENDPOINT
