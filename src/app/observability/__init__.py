"""Observabilidade: contexto de entrega e métricas via logs estruturados.

Uso:
    from app.observability import get_delivery_id, set_delivery_id
    from app.observability import record_latency, record_dispatch
"""

from app.observability.delivery import (
    get_delivery_id,
    reset_delivery_id,
    set_delivery_id,
)
from app.observability.metrics import (
    record_dispatch,
    record_event_outcome,
    record_latency,
)

__all__ = [
    "get_delivery_id",
    "record_dispatch",
    "record_event_outcome",
    "record_latency",
    "reset_delivery_id",
    "set_delivery_id",
]
