"""Roteamento das notificações formatadas para o chat de cada categoria.

follow → chat de follows; activity (perfis, casts) e trade → chat próprio,
com fallback para o chat de follows; diagnósticos → chat de follows.
Canal ausente ou sender não configurado é no-op silencioso. Falha de
entrega é logada e absorvida: o webhook nunca falha por causa do sink.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.observability import record_dispatch, record_latency
from app.protocols.models import EventCategory

if TYPE_CHECKING:
    from app.protocols.outbound_sender import NotificationSenderProtocol

logger = logging.getLogger(__name__)

DIAGNOSTIC_CHANNEL = "diagnostic"


class NotificationDispatcher:
    """Envia texto HTML ao chat da categoria."""

    def __init__(
        self,
        sender: NotificationSenderProtocol | None,
        follow_chat_id: str | None = None,
        activity_chat_id: str | None = None,
        trade_chat_id: str | None = None,
    ) -> None:
        self._sender = sender
        self._chats: dict[str, str | None] = {
            EventCategory.FOLLOW.value: follow_chat_id or None,
            EventCategory.ACTIVITY.value: activity_chat_id or follow_chat_id or None,
            EventCategory.TRADE.value: trade_chat_id or follow_chat_id or None,
            DIAGNOSTIC_CHANNEL: follow_chat_id or None,
        }

    def chat_for(self, channel: EventCategory | str) -> str | None:
        """Chat efetivo do canal (após fallback), ou None."""
        key = channel.value if isinstance(channel, EventCategory) else channel
        return self._chats.get(key)

    async def dispatch(self, channel: EventCategory | str, text: str) -> bool:
        """Envia `text` ao chat do canal.

        Returns:
            True se o sink confirmou a entrega; False em no-op ou falha.
        """
        key = channel.value if isinstance(channel, EventCategory) else channel
        chat_id = self._chats.get(key)
        if self._sender is None:
            record_dispatch(key, delivered=False, reason="sender_unset")
            return False
        if not chat_id:
            record_dispatch(key, delivered=False, reason="channel_unset")
            return False

        started_at = time.perf_counter()
        try:
            await self._sender.send_message(chat_id, text)
        except Exception as exc:
            logger.error(
                "notification_send_failed",
                extra={"channel": key, "error_type": type(exc).__name__, "error": str(exc)},
            )
            record_dispatch(key, delivered=False, reason=type(exc).__name__)
            return False
        finally:
            record_latency("dispatcher", "send", (time.perf_counter() - started_at) * 1000)

        record_dispatch(key, delivered=True)
        return True

    async def dispatch_diagnostic(self, text: str) -> bool:
        return await self.dispatch(DIAGNOSTIC_CHANNEL, text)
