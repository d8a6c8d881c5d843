"""Registro de métricas via structured logging.

As métricas saem como logs JSON (`metric_type` no payload) e podem ser
agregadas depois (Cloud Logging, Loki, BigQuery).

Métricas suportadas:
- latency: tempo de operações com IO (lookup, entrega)
- event_outcome: desfecho de cada entrega de webhook
- dispatch: resultado de cada envio por canal

Uso:
    start = time.perf_counter()
    ...
    record_latency("profile_cache", "lookup", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(component: str, operation: str, latency_ms: float) -> None:
    """Registra latência de operação.

    Args:
        component: Componente (ex: "profile_cache", "dispatcher")
        operation: Operação (ex: "lookup", "send")
        latency_ms: Latência em milissegundos
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
        },
    )


def record_event_outcome(event_type: str, outcome: str) -> None:
    """Registra o desfecho de uma entrega (dispatched, duplicate, ...)."""
    logger.info(
        "metric_event_outcome",
        extra={
            "metric_type": "event_outcome",
            "event_type": event_type or "unknown",
            "outcome": outcome,
        },
    )


def record_dispatch(channel: str, delivered: bool, reason: str | None = None) -> None:
    """Registra resultado de envio para um canal lógico.

    Args:
        channel: Canal lógico (follow, activity, trade)
        delivered: True se o sink confirmou
        reason: Motivo quando não entregue (ex: "channel_unset")
    """
    extra: dict[str, object] = {
        "metric_type": "dispatch",
        "channel": channel,
        "delivered": delivered,
    }
    if reason:
        extra["reason"] = reason
    logger.info("metric_dispatch", extra=extra)
