"""Connector Telegram: sink de notificações via Bot API."""

from .http_client import TelegramHttpClient, create_telegram_http_client

__all__ = ["TelegramHttpClient", "create_telegram_http_client"]
