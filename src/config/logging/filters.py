"""Filters de logging para injeção de contexto da entrega.

Campos injetados em todo record:
- delivery_id: identificador da entrega de webhook em andamento
- service: nome do serviço
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class DeliveryContextFilter(logging.Filter):
    """Injeta delivery_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        delivery_id_getter: Função que retorna o delivery_id atual.
            Sem getter, o campo sai como string vazia.
    """

    def __init__(
        self,
        service_name: str,
        delivery_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_delivery_id = delivery_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta.

        Um delivery_id passado explicitamente via `extra` é preservado.
        """
        existing = getattr(record, "delivery_id", None)
        record.delivery_id = existing if existing else self._get_delivery_id()
        record.service = self._service_name
        return True
