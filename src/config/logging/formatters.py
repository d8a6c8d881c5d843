"""Formatters de logging estruturado.

Todo log sai em JSON com os campos obrigatórios abaixo. O delivery_id
identifica a entrega de webhook em processamento (vazio fora de requests).

Nunca logar payload bruto, segredo do webhook ou tokens de API.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem fixa para facilitar leitura em `docker logs`/Cloud Logging
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "delivery_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter(timestamp_format: str | None = None) -> JsonFormatter:
    """Cria formatter JSON com os campos padronizados.

    Args:
        timestamp_format: Formato opcional de `asctime` (strftime).

    Returns:
        JsonFormatter configurado.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,123",
            "level": "INFO",
            "logger": "app.use_cases.neynar.process_webhook_event",
            "message": "webhook_event_processed",
            "delivery_id": "a3f1c2...",
            "service": "farcaster_notifier",
            "event_type": "follow.created"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        datefmt=timestamp_format,
        rename_fields=FIELD_RENAME_MAP,
    )
