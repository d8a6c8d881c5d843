"""Cliente HTTP do Telegram Bot API (sendMessage).

Mensagens sempre em HTML e sem preview de links. O token vai na URL do
bot; nunca aparece em logs.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from app.infra.http import HttpClient, HttpClientConfig
from utils.errors import NotificationDeliveryError

if TYPE_CHECKING:
    from config.settings import TelegramSettings

logger: logging.Logger = logging.getLogger(__name__)


class TelegramHttpClient(HttpClient):
    """Envio de mensagens de texto via Bot API."""

    def __init__(self, endpoint: str, config: HttpClientConfig | None = None) -> None:
        super().__init__(config)
        self._endpoint = endpoint

    async def send_message(self, chat_id: str, text: str) -> dict[str, Any]:
        """Envia `text` (HTML) para `chat_id`.

        Raises:
            NotificationDeliveryError: status != 2xx, corpo inválido ou `ok` falso
            HttpError: retries esgotados em 429/5xx/erro de conexão
        """
        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }
        response = await self.post(self._endpoint, json=payload)

        try:
            body = response.json()
        except json.JSONDecodeError as exc:
            raise NotificationDeliveryError(
                f"telegram_invalid_response:{response.status_code}"
            ) from exc

        if response.status_code >= 400 or not isinstance(body, dict) or not body.get("ok"):
            description = body.get("description") if isinstance(body, dict) else None
            logger.warning(
                "telegram_send_rejected",
                extra={"status_code": response.status_code, "description": description},
            )
            raise NotificationDeliveryError(f"telegram_send_failed:{response.status_code}")

        return body


def create_telegram_http_client(
    settings: TelegramSettings | None = None,
    transport: Any = None,
) -> TelegramHttpClient:
    """Factory do cliente Telegram com config do ambiente.

    Raises:
        ValueError: Se TELEGRAM_BOT_TOKEN não estiver configurado.
    """
    from config.settings import get_telegram_settings

    telegram = settings or get_telegram_settings()
    config = HttpClientConfig(
        timeout_seconds=telegram.request_timeout_seconds,
        max_retries=telegram.max_retries,
        transport=transport,
    )
    return TelegramHttpClient(endpoint=telegram.send_message_endpoint, config=config)
