"""Exceções de domínio compartilhadas entre api/ e app/."""

from __future__ import annotations


class MalformedPayloadError(ValueError):
    """Payload de webhook com estrutura inutilizável."""


class MissingIdentifierError(MalformedPayloadError):
    """Tipo de evento conhecido, mas ids obrigatórios não extraíveis.

    Attributes:
        event_type: tipo do evento (ex.: "follow.created")
        missing: nomes lógicos dos ids ausentes
    """

    def __init__(self, event_type: str, missing: tuple[str, ...]) -> None:
        super().__init__(f"missing_identifiers:{event_type}:{','.join(missing)}")
        self.event_type = event_type
        self.missing = missing


class CollaboratorError(RuntimeError):
    """Base para falhas de colaboradores externos (lookup, entrega)."""


class ProfileLookupError(CollaboratorError):
    """Falha no lookup em lote de perfis."""


class NotificationDeliveryError(CollaboratorError):
    """Falha na entrega de notificação ao sink."""
