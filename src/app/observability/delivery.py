"""Contexto da entrega de webhook em processamento.

O delivery_id acompanha todos os logs emitidos durante uma entrega.
Usa ContextVar: cada request (task asyncio) enxerga o próprio valor.

Uso:
    token = set_delivery_id(request.headers.get("x-request-id"))
    try:
        ...
    finally:
        reset_delivery_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_delivery_id: ContextVar[str] = ContextVar("delivery_id", default="")


def get_delivery_id() -> str:
    """Retorna o delivery_id atual (string vazia fora de uma entrega)."""
    return _delivery_id.get()


def set_delivery_id(delivery_id: str | None = None) -> Token[str]:
    """Define o delivery_id; gera um hex aleatório quando ausente."""
    return _delivery_id.set(delivery_id or uuid.uuid4().hex)


def reset_delivery_id(token: Token[str]) -> None:
    _delivery_id.reset(token)
