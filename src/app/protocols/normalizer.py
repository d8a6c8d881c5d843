"""Protocolos de normalização inbound."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import NormalizedEvent, RawEvent


class EventNormalizerProtocol(Protocol):
    """Contrato mínimo para normalização de eventos do webhook.

    Retorna None para tipos desconhecidos; levanta MissingIdentifierError
    quando o tipo é conhecido mas os ids obrigatórios não são extraíveis.
    """

    def normalize(self, event: RawEvent) -> NormalizedEvent | None: ...
