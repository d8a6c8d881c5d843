"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.base import (
    DEFAULT_DEDUPE_CAPACITY,
    BaseSettings,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)
from config.settings.neynar import (
    NEYNAR_API_BASE_URL,
    NEYNAR_SIGNATURE_HEADER,
    NEYNAR_WEBHOOK_PATH,
    NeynarSettings,
    get_neynar_settings,
)
from config.settings.telegram import (
    TELEGRAM_API_BASE_URL,
    TelegramSettings,
    get_telegram_settings,
)

__all__ = [
    # Constants
    "DEFAULT_DEDUPE_CAPACITY",
    "NEYNAR_API_BASE_URL",
    "NEYNAR_SIGNATURE_HEADER",
    "NEYNAR_WEBHOOK_PATH",
    "TELEGRAM_API_BASE_URL",
    # Base
    "BaseSettings",
    "DedupeSettings",
    "Environment",
    # Channels
    "NeynarSettings",
    "TelegramSettings",
    "get_base_settings",
    "get_dedupe_settings",
    "get_neynar_settings",
    "get_telegram_settings",
]
