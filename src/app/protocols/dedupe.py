"""Protocolo do filtro de idempotência de entregas.

Interface leve (ABC) dependida pelo use case de webhook.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IdempotencyProtocol(ABC):
    """Contrato do registro de eventos já processados.

    Método canônico:
    - seen_before(event_id) -> bool
      Retorna True se o id já foi registrado (entrega duplicada). Se não,
      registra-o e retorna False. Ids vazios nunca são deduplicados.
    """

    @abstractmethod
    def seen_before(self, event_id: str | None) -> bool:
        """Verifica e registra o id de forma atômica.

        Args:
            event_id: id da entrega; None/"" nunca é registrado

        Returns:
            True se duplicado; False se registrado agora (ou sem id).
        """
