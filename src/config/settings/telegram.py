"""Settings específicas de Telegram.

Configurações do sink de notificações via Bot API. Cada categoria de
evento pode ir para um chat diferente; atividade geral e trades caem no
chat de follows quando não configurados.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"


@dataclass(frozen=True)
class TelegramSettings:
    """Configurações do canal Telegram.

    Attributes:
        bot_token: Token do bot (obtido via @BotFather)
        follow_chat_id: Chat dos eventos de follow (canal padrão)
        activity_chat_id: Chat de perfis e casts; vazio = follow_chat_id
        trade_chat_id: Chat de trades; vazio = follow_chat_id
        api_base_url: URL base da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Tentativas extras em 429/5xx/erro de conexão
    """

    bot_token: str = ""
    follow_chat_id: str = ""
    activity_chat_id: str = ""
    trade_chat_id: str = ""

    api_base_url: str = TELEGRAM_API_BASE_URL

    request_timeout_seconds: float = 10.0
    max_retries: int = 1

    @property
    def enabled(self) -> bool:
        """True quando o bot tem token configurado."""
        return bool(self.bot_token)

    @property
    def resolved_activity_chat_id(self) -> str:
        """Chat efetivo de atividade geral."""
        return self.activity_chat_id or self.follow_chat_id

    @property
    def resolved_trade_chat_id(self) -> str:
        """Chat efetivo de trades."""
        return self.trade_chat_id or self.follow_chat_id

    @property
    def send_message_endpoint(self) -> str:
        """URL do método sendMessage do bot.

        Raises:
            ValueError: Se bot_token não estiver configurado.
        """
        if not self.bot_token:
            raise ValueError("bot_token é obrigatório")
        return f"{self.api_base_url.rstrip('/')}/bot{self.bot_token}/sendMessage"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Telegram."""
        errors: list[str] = []
        if not self.bot_token:
            errors.append("TELEGRAM_BOT_TOKEN não configurado")
        if not self.follow_chat_id:
            errors.append("TELEGRAM_CHAT_ID não configurado")
        if self.request_timeout_seconds <= 0:
            errors.append("TELEGRAM_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        return errors


def _load_telegram_from_env() -> TelegramSettings:
    """Carrega TelegramSettings de variáveis de ambiente."""
    return TelegramSettings(
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        follow_chat_id=os.getenv("TELEGRAM_CHAT_ID", ""),
        activity_chat_id=os.getenv("TELEGRAM_ACTIVITY_CHAT_ID", ""),
        trade_chat_id=os.getenv("TELEGRAM_TRADE_CHAT_ID", ""),
        api_base_url=os.getenv("TELEGRAM_API_BASE_URL", TELEGRAM_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("TELEGRAM_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("TELEGRAM_MAX_RETRIES", "1")),
    )


@lru_cache(maxsize=1)
def get_telegram_settings() -> TelegramSettings:
    """Retorna instância cacheada de TelegramSettings."""
    return _load_telegram_from_env()
