"""Normalizer Neynar: converte envelopes de webhook em eventos tipados.

Uma função de extração por categoria; cada campo lógico usa a cadeia de
regras de `rules.py`. Tipos desconhecidos não produzem evento nem erro.
Ids obrigatórios ausentes levantam MissingIdentifierError.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.protocols.models import (
    FollowAction,
    FollowEvent,
    PostEvent,
    ProfileUpdateEvent,
    RawEvent,
    TradeEvent,
)
from utils.errors import MissingIdentifierError

from . import rules
from ._coercion import coerce_float, coerce_id, coerce_text, coerce_timestamp_ms, seconds_to_ms
from .profile import canonical_field_name, snapshot_from_mapping

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.models import NormalizedEvent

logger = logging.getLogger(__name__)

FOLLOW_CREATED = "follow.created"
FOLLOW_DELETED = "follow.deleted"
USER_UPDATED = "user.updated"
CAST_CREATED = "cast.created"
TRADE_CREATED = "trade.created"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _event_timestamp(
    event: RawEvent,
    data_rules: tuple[rules.FieldRule, ...],
    now_ms: Callable[[], int],
) -> int:
    """Timestamp do `data`, senão `created_at` do evento, senão agora."""
    return (
        rules.extract(event.data, data_rules, coerce_timestamp_ms)
        or seconds_to_ms(event.created_at)
        or now_ms()
    )


def extract_follow(event: RawEvent, now_ms: Callable[[], int] = _now_ms) -> FollowEvent:
    """Extrai follow/unfollow.

    Raises:
        MissingIdentifierError: Se actor ou target não forem extraíveis.
    """
    data = event.data
    actor_id = rules.extract(data, rules.FOLLOW_ACTOR_ID, coerce_id)
    target_id = rules.extract(data, rules.FOLLOW_TARGET_ID, coerce_id)
    if actor_id is None or target_id is None:
        missing = tuple(
            name
            for name, value in (("actor_id", actor_id), ("target_id", target_id))
            if value is None
        )
        raise MissingIdentifierError(event.event_type, missing)

    return FollowEvent(
        actor_id=actor_id,
        target_id=target_id,
        timestamp=_event_timestamp(event, rules.FOLLOW_TIMESTAMP, now_ms),
        action=FollowAction.DELETED if event.event_type == FOLLOW_DELETED else FollowAction.CREATED,
        actor_name=rules.extract(data, rules.FOLLOW_ACTOR_NAME, coerce_text),
        target_name=rules.extract(data, rules.FOLLOW_TARGET_NAME, coerce_text),
    )


def _updated_field_names(value: Any) -> tuple[str, ...] | None:
    if not isinstance(value, list):
        return None
    names = [canonical_field_name(item) for item in value if isinstance(item, str) and item.strip()]
    return tuple(dict.fromkeys(names)) or None


def extract_profile_update(
    event: RawEvent,
    now_ms: Callable[[], int] = _now_ms,
) -> ProfileUpdateEvent:
    """Extrai edição de perfil (before/after e nomes de campos, se houver).

    Raises:
        MissingIdentifierError: Se o fid não for extraível.
    """
    data = event.data
    profile_id = rules.extract(data, rules.PROFILE_ID, coerce_id)
    if profile_id is None:
        raise MissingIdentifierError(event.event_type, ("id",))

    return ProfileUpdateEvent(
        id=profile_id,
        timestamp=_event_timestamp(event, rules.PROFILE_TIMESTAMP, now_ms),
        name=rules.extract(data, rules.PROFILE_NAME, coerce_text),
        before=rules.extract(data, rules.PROFILE_BEFORE, snapshot_from_mapping),
        after=rules.extract(data, rules.PROFILE_AFTER, snapshot_from_mapping),
        updated_field_names=rules.extract(
            data, rules.PROFILE_UPDATED_FIELDS, _updated_field_names
        ),
    )


def is_root_post(data: dict[str, Any]) -> bool:
    """Raiz = nenhuma referência a cast pai (canal não conta)."""
    return not rules.any_present(data, rules.POST_PARENT_CAST_REFS)


def extract_post(event: RawEvent, now_ms: Callable[[], int] = _now_ms) -> PostEvent:
    """Extrai cast publicado.

    Raises:
        MissingIdentifierError: Se o autor não for extraível.
    """
    data = event.data
    author_id = rules.extract(data, rules.POST_AUTHOR_ID, coerce_id)
    if author_id is None:
        raise MissingIdentifierError(event.event_type, ("author_id",))

    parent_ref = next(
        (ref for rule in rules.POST_PARENT_CAST_REFS if (ref := coerce_text(rule(data)))),
        None,
    )
    return PostEvent(
        author_id=author_id,
        timestamp=_event_timestamp(event, rules.POST_TIMESTAMP, now_ms),
        is_root=is_root_post(data),
        author_name=rules.extract(data, rules.POST_AUTHOR_NAME, coerce_text),
        text=rules.extract(data, rules.POST_TEXT, coerce_text),
        post_ref=rules.extract(data, rules.POST_REF, coerce_text),
        parent_ref=parent_ref,
        channel_ref=rules.extract(data, rules.POST_CHANNEL_REFS, coerce_text),
    )


def extract_trade(event: RawEvent, now_ms: Callable[[], int] = _now_ms) -> TradeEvent:
    """Extrai trade (swap) do trader.

    O timestamp vem do `created_at` do evento (segundos); sem ele, agora.

    Raises:
        MissingIdentifierError: Se o trader não for extraível.
    """
    data = event.data
    trader_id = rules.extract(data, rules.TRADE_TRADER_ID, coerce_id)
    if trader_id is None:
        raise MissingIdentifierError(event.event_type, ("trader_id",))

    net_transfer = rules.first_value(data, rules.TRADE_NET_TRANSFER)
    if not isinstance(net_transfer, dict):
        net_transfer = {}

    return TradeEvent(
        trader_id=trader_id,
        timestamp=seconds_to_ms(event.created_at) or now_ms(),
        trader_name=rules.extract(data, rules.TRADE_TRADER_NAME, coerce_text),
        amount_usd=rules.extract(net_transfer, rules.NET_TRANSFER_AMOUNT_USD, coerce_float),
        token_in=rules.extract(net_transfer, rules.NET_TRANSFER_TOKEN_IN, coerce_text),
        token_out=rules.extract(net_transfer, rules.NET_TRANSFER_TOKEN_OUT, coerce_text),
        tx_ref=rules.extract(data, rules.TRADE_TX_REF, coerce_text),
        chain=rules.extract(data, rules.TRADE_CHAIN, coerce_text),
    )


_EXTRACTORS: dict[str, Callable[..., NormalizedEvent]] = {
    FOLLOW_CREATED: extract_follow,
    FOLLOW_DELETED: extract_follow,
    USER_UPDATED: extract_profile_update,
    CAST_CREATED: extract_post,
    TRADE_CREATED: extract_trade,
}

SUPPORTED_EVENT_TYPES = frozenset(_EXTRACTORS)


class NeynarEventNormalizer:
    """Implementação de EventNormalizerProtocol para webhooks Neynar."""

    def __init__(self, now_ms: Callable[[], int] = _now_ms) -> None:
        self._now_ms = now_ms

    def normalize(self, event: RawEvent) -> NormalizedEvent | None:
        """Normaliza um envelope; None para tipos desconhecidos.

        Raises:
            MissingIdentifierError: Tipo conhecido sem ids obrigatórios.
        """
        extractor = _EXTRACTORS.get(event.event_type)
        if extractor is None:
            logger.info("unsupported_event_type_received", extra={"event_type": event.event_type})
            return None
        return extractor(event, now_ms=self._now_ms)


def normalize_event(
    payload: dict[str, Any],
    now_ms: Callable[[], int] = _now_ms,
) -> NormalizedEvent | None:
    """Atalho: JSON decodificado → evento normalizado (ou None)."""
    return NeynarEventNormalizer(now_ms).normalize(RawEvent.from_payload(payload))
