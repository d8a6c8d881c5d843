"""Endpoint do webhook Neynar.

Fluxo do POST:
1. Assinatura HMAC-SHA512 sobre o corpo bruto (antes do JSON)
2. JSON válido (inválido → 200 "ok", entrega ignorada)
3. Pipeline completo inline; a resposta reflete falha interna (500)

Respostas em texto puro: "ok", "invalid signature", "error".
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status

from api.connectors.neynar.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from app.observability import reset_delivery_id, set_delivery_id
from config.settings import get_neynar_settings

logger = logging.getLogger(__name__)

router = APIRouter()

# Lazy-loaded use case (inicializado na primeira requisição)
_webhook_use_case = None


def _get_webhook_use_case():
    """Obtém o use case do webhook (lazy-loading)."""
    global _webhook_use_case
    if _webhook_use_case is None:
        from app.bootstrap import get_process_webhook_use_case

        _webhook_use_case = get_process_webhook_use_case()
    return _webhook_use_case


def _text(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> Response:
    """Recebimento de eventos Farcaster entregues pelo Neynar.

    Returns:
        200 "ok" (processado ou ignorado), 401 "invalid signature"
        ou 500 "error".
    """
    token = set_delivery_id(request.headers.get("x-request-id"))

    try:
        settings = get_neynar_settings()

        # Lê body bruto para validação de assinatura
        raw_body = await request.body()

        try:
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=dict(request.headers),
                secret=settings.webhook_secret or None,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={"channel": "neynar", "error": str(exc)},
            )
            return _text("invalid signature", status.HTTP_401_UNAUTHORIZED)
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={"channel": "neynar", "error": str(exc), "payload_size": len(raw_body)},
            )
            return _text("ok", status.HTTP_200_OK)

        if signature_result.skipped:
            logger.warning("signature_skipped", extra={"channel": "neynar"})

        logger.info(
            "webhook_received",
            extra={
                "channel": "neynar",
                "event_type": payload.get("type"),
                "signature_valid": signature_result.valid,
                "payload_size": len(raw_body),
            },
        )

        try:
            result = await _get_webhook_use_case().execute(payload)
        except Exception:
            logger.exception(
                "webhook_processing_failed",
                extra={"channel": "neynar"},
            )
            return _text("error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(
            "webhook_processed",
            extra={
                "channel": "neynar",
                "event_type": result.event_type,
                "outcome": result.outcome.value,
            },
        )
        return _text("ok", status.HTTP_200_OK)

    finally:
        reset_delivery_id(token)
