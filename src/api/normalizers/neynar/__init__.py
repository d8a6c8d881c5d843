"""Normalizer Neynar: extração e normalização de eventos do webhook.

Responsabilidades:
- Aplicar as cadeias de regras por campo (payloads variam por versão)
- Coagir ids/timestamps sem levantar para valores inválidos
- Produzir exatamente uma variante tipada por envelope reconhecido

Tipos suportados: follow.created, follow.deleted, user.updated,
cast.created, trade.created.
"""

from .normalizer import (
    SUPPORTED_EVENT_TYPES,
    NeynarEventNormalizer,
    extract_follow,
    extract_post,
    extract_profile_update,
    extract_trade,
    is_root_post,
    normalize_event,
)
from .profile import canonical_field_name, snapshot_from_mapping

__all__ = [
    "SUPPORTED_EVENT_TYPES",
    "NeynarEventNormalizer",
    "canonical_field_name",
    "extract_follow",
    "extract_post",
    "extract_profile_update",
    "extract_trade",
    "is_root_post",
    "normalize_event",
    "snapshot_from_mapping",
]
