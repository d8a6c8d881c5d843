"""Endpoints de health check e readiness."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings, get_neynar_settings, get_telegram_settings

logger = logging.getLogger(__name__)

router = APIRouter()

ROOT_STATUS_TEXT = "Farcaster Follow Notifier is running"


class ReadinessChecks(BaseModel):
    """Estado de configuração de cada colaborador."""

    signature_verification: bool
    profile_lookup: bool
    notifications: bool


class ReadinessResponse(BaseModel):
    """Resposta do readiness probe."""

    status: Literal["ready", "not_ready"]
    service: str
    environment: str
    checks: ReadinessChecks
    timestamp: str


def build_readiness() -> ReadinessResponse:
    """Readiness = sink de notificações configurado (token + chat de follows)."""
    base = get_base_settings()
    neynar = get_neynar_settings()
    telegram = get_telegram_settings()
    checks = ReadinessChecks(
        signature_verification=neynar.signature_required,
        profile_lookup=bool(neynar.api_key),
        notifications=telegram.enabled and bool(telegram.follow_chat_id),
    )
    return ReadinessResponse(
        status="ready" if checks.notifications else "not_ready",
        service=base.service_name,
        environment=base.environment,
        checks=checks,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/health")
async def health_check() -> Response:
    """Liveness probe: verifica se o serviço está rodando."""
    return Response(content="ok", media_type="text/plain", status_code=status.HTTP_200_OK)


@router.get("/")
async def root_status() -> Response:
    return Response(
        content=ROOT_STATUS_TEXT, media_type="text/plain", status_code=status.HTTP_200_OK
    )


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Readiness probe com o estado da configuração."""
    readiness = build_readiness()
    if readiness.status != "ready":
        logger.warning("readiness_not_ready", extra={"checks": readiness.checks.model_dump()})
    return JSONResponse(
        content=readiness.model_dump(),
        status_code=status.HTTP_200_OK
        if readiness.status == "ready"
        else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
