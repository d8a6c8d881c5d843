"""Factories de dependências: criação de implementações concretas.

Único módulo autorizado a acoplar app <-> api: conecta os connectors e o
normalizer Neynar aos protocolos consumidos pelo use case.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from api.connectors.neynar import create_neynar_http_client
from api.connectors.telegram import create_telegram_http_client
from api.normalizers.neynar import NeynarEventNormalizer
from app.infra.stores import MemoryIdempotencyStore, MemorySnapshotStore, ProfileCache
from app.services.dispatcher import NotificationDispatcher
from app.services.profile_diff import ProfileDiffEngine
from app.use_cases.neynar import ProcessWebhookEventUseCase
from config.settings import (
    get_dedupe_settings,
    get_neynar_settings,
    get_telegram_settings,
)

if TYPE_CHECKING:
    from app.protocols.dedupe import IdempotencyProtocol
    from app.protocols.outbound_sender import NotificationSenderProtocol
    from app.protocols.profile_lookup import ProfileResolverProtocol, SnapshotStoreProtocol

logger = logging.getLogger(__name__)


def create_idempotency_store() -> MemoryIdempotencyStore:
    """Janela de dedupe em memória (capacidade via DEDUPE_CAPACITY)."""
    capacity = get_dedupe_settings().capacity
    environment = os.getenv("ENVIRONMENT", "development")
    store = MemoryIdempotencyStore(capacity=capacity)
    logger.info(
        "idempotency_store_created",
        extra={"backend": "memory", "capacity": capacity, "environment": environment},
    )
    return store


def create_snapshot_store() -> MemorySnapshotStore:
    return MemorySnapshotStore()


def create_profile_cache() -> ProfileCache:
    """Cache de perfis apoiado no lookup em lote do Neynar."""
    neynar = get_neynar_settings()
    if not neynar.api_key:
        logger.warning("neynar_api_key_missing", extra={"component": "profile_cache"})
    return ProfileCache(
        lookup=create_neynar_http_client(neynar),
        ttl_seconds=neynar.profile_cache_ttl_seconds,
    )


def create_notification_sender() -> NotificationSenderProtocol | None:
    """Cliente Telegram; None quando o bot não tem token (envios viram no-op)."""
    telegram = get_telegram_settings()
    if not telegram.enabled:
        logger.warning("telegram_sender_disabled", extra={"reason": "bot_token_missing"})
        return None
    return create_telegram_http_client(telegram)


def create_dispatcher() -> NotificationDispatcher:
    telegram = get_telegram_settings()
    return NotificationDispatcher(
        sender=create_notification_sender(),
        follow_chat_id=telegram.follow_chat_id,
        activity_chat_id=telegram.activity_chat_id,
        trade_chat_id=telegram.trade_chat_id,
    )


def create_process_webhook_use_case(
    *,
    idempotency: IdempotencyProtocol,
    profile_cache: ProfileResolverProtocol,
    snapshot_store: SnapshotStoreProtocol,
    dispatcher: NotificationDispatcher,
) -> ProcessWebhookEventUseCase:
    """Monta o use case com as dependências já criadas."""
    return ProcessWebhookEventUseCase(
        idempotency=idempotency,
        normalizer=NeynarEventNormalizer(),
        profile_cache=profile_cache,
        diff_engine=ProfileDiffEngine(profile_cache, snapshot_store),
        dispatcher=dispatcher,
    )
