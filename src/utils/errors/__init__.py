"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CollaboratorError,
    MalformedPayloadError,
    MissingIdentifierError,
    NotificationDeliveryError,
    ProfileLookupError,
)

__all__ = [
    "CollaboratorError",
    "MalformedPayloadError",
    "MissingIdentifierError",
    "NotificationDeliveryError",
    "ProfileLookupError",
]
