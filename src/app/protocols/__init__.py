"""Protocolos (contratos) consumidos pela camada app.

Implementações concretas vivem em app/infra e api/connectors; o wiring
acontece em app/bootstrap.
"""

from .dedupe import IdempotencyProtocol
from .models import (
    EventCategory,
    FollowAction,
    FollowEvent,
    NormalizedEvent,
    PostEvent,
    ProfileUpdateEvent,
    RawEvent,
    TradeEvent,
)
from .normalizer import EventNormalizerProtocol
from .outbound_sender import NotificationSenderProtocol
from .profile_lookup import (
    ProfileLookupProtocol,
    ProfileResolverProtocol,
    SnapshotStoreProtocol,
)

__all__ = [
    "EventCategory",
    "EventNormalizerProtocol",
    "FollowAction",
    "FollowEvent",
    "IdempotencyProtocol",
    "NormalizedEvent",
    "NotificationSenderProtocol",
    "PostEvent",
    "ProfileLookupProtocol",
    "ProfileResolverProtocol",
    "ProfileUpdateEvent",
    "RawEvent",
    "SnapshotStoreProtocol",
    "TradeEvent",
]
