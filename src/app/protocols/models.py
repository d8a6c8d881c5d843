"""Modelos do pipeline de eventos: entrada bruta e variantes normalizadas.

RawEvent é o payload exatamente como entregue pelo provedor. As variantes
normalizadas são imutáveis e carregam a categoria usada no roteamento.
Timestamps são sempre epoch em milissegundos.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.profile import ProfileSnapshot


class EventCategory(str, Enum):
    """Categoria lógica do evento (define o canal de notificação)."""

    FOLLOW = "follow"
    ACTIVITY = "activity"
    TRADE = "trade"


class FollowAction(str, Enum):
    CREATED = "created"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class RawEvent:
    """Envelope do webhook como recebido (nunca mutado).

    Attributes:
        event_id: id da entrega (chave de dedupe), se presente
        event_type: tipo do evento (ex.: "follow.created")
        created_at: `created_at`/`createdAt` de nível de evento, em segundos
        data: objeto `data` do payload
        raw: payload completo decodificado
    """

    event_id: str | None
    event_type: str
    created_at: float | None
    data: Mapping[str, Any]
    raw: Mapping[str, Any] = field(repr=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> RawEvent:
        """Monta o envelope a partir do JSON decodificado."""
        event_id = payload.get("id")
        created_at = payload.get("created_at", payload.get("createdAt"))
        data = payload.get("data")
        return cls(
            event_id=str(event_id) if event_id not in (None, "") else None,
            event_type=str(payload.get("type") or ""),
            created_at=_as_number(created_at),
            data=data if isinstance(data, dict) else {},
            raw=payload,
        )


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True, slots=True)
class FollowEvent:
    actor_id: int
    target_id: int
    timestamp: int
    action: FollowAction = FollowAction.CREATED
    actor_name: str | None = None
    target_name: str | None = None

    category = EventCategory.FOLLOW


@dataclass(frozen=True, slots=True)
class ProfileUpdateEvent:
    """Edição de perfil; before/after vêm do payload quando presentes."""

    id: int
    timestamp: int
    name: str | None = None
    before: ProfileSnapshot | None = None
    after: ProfileSnapshot | None = None
    updated_field_names: tuple[str, ...] | None = None

    category = EventCategory.ACTIVITY


@dataclass(frozen=True, slots=True)
class PostEvent:
    """Cast publicado.

    `channel_ref` é apenas informativo: não afeta `is_root`.
    """

    author_id: int
    timestamp: int
    is_root: bool
    author_name: str | None = None
    text: str | None = None
    post_ref: str | None = None
    parent_ref: str | None = None
    channel_ref: str | None = None

    category = EventCategory.ACTIVITY


@dataclass(frozen=True, slots=True)
class TradeEvent:
    trader_id: int
    timestamp: int
    trader_name: str | None = None
    amount_usd: float | None = None
    token_in: str | None = None
    token_out: str | None = None
    tx_ref: str | None = None
    chain: str | None = None

    category = EventCategory.TRADE


NormalizedEvent = Union[FollowEvent, ProfileUpdateEvent, PostEvent, TradeEvent]
