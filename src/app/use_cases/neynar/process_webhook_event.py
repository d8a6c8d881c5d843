"""Use case de processamento de uma entrega do webhook Neynar.

Fluxo: dedupe → normalização → enriquecimento (nomes, diff de perfil) →
formatação → dispatch. Falhas de colaboradores (lookup, entrega) já são
absorvidas pelos componentes; exceções que chegam aqui são falhas
internas e sobem para a rota (HTTP 500).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from app.protocols.models import (
    FollowEvent,
    PostEvent,
    ProfileUpdateEvent,
    RawEvent,
    TradeEvent,
)
from app.observability import record_event_outcome
from app.services import message_formatter as fmt
from utils.errors import MissingIdentifierError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.profile import ProfileSnapshot
    from app.protocols.dedupe import IdempotencyProtocol
    from app.protocols.models import NormalizedEvent
    from app.protocols.normalizer import EventNormalizerProtocol
    from app.protocols.profile_lookup import ProfileResolverProtocol
    from app.services.dispatcher import NotificationDispatcher
    from app.services.profile_diff import ProfileDiffEngine

logger = logging.getLogger(__name__)


class ProcessingOutcome(str, Enum):
    """Desfecho de uma entrega (todos resultam em HTTP 200)."""

    DISPATCHED = "dispatched"
    NOT_DELIVERED = "not_delivered"
    DUPLICATE = "duplicate"
    UNSUPPORTED_TYPE = "unsupported_type"
    NON_ROOT_POST = "non_root_post"
    MISSING_IDENTIFIERS = "missing_identifiers"


@dataclass(frozen=True, slots=True)
class WebhookProcessingResult:
    """Resultado do processamento de uma entrega."""

    outcome: ProcessingOutcome
    event_type: str
    event_id: str | None = None
    text: str | None = None


def display_name_for(profile_id: int, snapshot: ProfileSnapshot | None) -> str:
    """Nome exibido: username, depois display name, depois `id:<id>`."""
    if snapshot is not None:
        if snapshot.name:
            return snapshot.name
        if snapshot.display_name:
            return snapshot.display_name
    return f"id:{profile_id}"


class ProcessWebhookEventUseCase:
    """Processa um payload já autenticado e decodificado."""

    def __init__(
        self,
        *,
        idempotency: IdempotencyProtocol,
        normalizer: EventNormalizerProtocol,
        profile_cache: ProfileResolverProtocol,
        diff_engine: ProfileDiffEngine,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._idempotency = idempotency
        self._normalizer = normalizer
        self._profile_cache = profile_cache
        self._diff_engine = diff_engine
        self._dispatcher = dispatcher

    async def execute(self, payload: Mapping[str, Any]) -> WebhookProcessingResult:
        """Executa o pipeline para uma entrega.

        Args:
            payload: JSON do webhook (objeto)

        Returns:
            WebhookProcessingResult com o desfecho.
        """
        raw_event = RawEvent.from_payload(payload)
        result = await self._process(raw_event)
        record_event_outcome(result.event_type, result.outcome.value)
        return result

    async def _process(self, raw_event: RawEvent) -> WebhookProcessingResult:
        event_type = raw_event.event_type
        event_id = raw_event.event_id

        if self._idempotency.seen_before(event_id):
            logger.info("duplicate_event_skipped", extra={"event_type": event_type})
            return WebhookProcessingResult(ProcessingOutcome.DUPLICATE, event_type, event_id)

        try:
            event = self._normalizer.normalize(raw_event)
        except MissingIdentifierError as exc:
            logger.warning(
                "event_identifiers_missing",
                extra={"event_type": event_type, "missing": list(exc.missing)},
            )
            text = fmt.format_diagnostic(raw_event.raw)
            await self._dispatcher.dispatch_diagnostic(text)
            return WebhookProcessingResult(
                ProcessingOutcome.MISSING_IDENTIFIERS, event_type, event_id, text
            )

        if event is None:
            return WebhookProcessingResult(ProcessingOutcome.UNSUPPORTED_TYPE, event_type, event_id)

        if isinstance(event, PostEvent) and not event.is_root:
            logger.debug("non_root_post_skipped", extra={"event_type": event_type})
            return WebhookProcessingResult(ProcessingOutcome.NON_ROOT_POST, event_type, event_id)

        text = await self._render(event)
        delivered = await self._dispatcher.dispatch(event.category, text)
        outcome = ProcessingOutcome.DISPATCHED if delivered else ProcessingOutcome.NOT_DELIVERED
        return WebhookProcessingResult(outcome, event_type, event_id, text)

    async def _names(self, wanted: Mapping[int, str | None]) -> dict[int, str]:
        """Nomes para os ids; lookup só para os que vieram sem nome."""
        missing = [profile_id for profile_id, name in wanted.items() if not name]
        resolved = await self._profile_cache.resolve(missing) if missing else {}
        return {
            profile_id: name or display_name_for(profile_id, resolved.get(profile_id))
            for profile_id, name in wanted.items()
        }

    async def _render(self, event: NormalizedEvent) -> str:
        if isinstance(event, FollowEvent):
            names = await self._names(
                {event.actor_id: event.actor_name, event.target_id: event.target_name}
            )
            return fmt.format_follow(event, names[event.actor_id], names[event.target_id])

        if isinstance(event, ProfileUpdateEvent):
            diff = await self._diff_engine.diff(event)
            name = event.name or (diff.new_snapshot.name if diff.new_snapshot else None)
            names = await self._names({event.id: name})
            return fmt.format_profile_update(names[event.id], diff.lines, event.timestamp)

        if isinstance(event, PostEvent):
            names = await self._names({event.author_id: event.author_name})
            return fmt.format_post(event, names[event.author_id])

        if isinstance(event, TradeEvent):
            names = await self._names({event.trader_id: event.trader_name})
            return fmt.format_trade(event, names[event.trader_id])

        raise TypeError(f"unsupported normalized event: {type(event).__name__}")
