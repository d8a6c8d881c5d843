"""Protocolos de envio outbound de notificações."""

from __future__ import annotations

from typing import Any, Protocol


class NotificationSenderProtocol(Protocol):
    """Contrato mínimo do serviço de entrega (texto HTML, sem preview).

    Levanta em falha de entrega; quem chama decide absorver.
    """

    async def send_message(self, chat_id: str, text: str) -> dict[str, Any]: ...
