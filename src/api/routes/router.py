"""Agregador de rotas: registra todos os routers por provedor.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.neynar.router import router as neynar_router
from config.settings import get_neynar_settings


def create_api_router(webhook_path: str | None = None) -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Args:
        webhook_path: Caminho do webhook Neynar (padrão: NEYNAR_WEBHOOK_PATH)

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /, /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(
        neynar_router,
        prefix=(webhook_path or get_neynar_settings().webhook_path).rstrip("/"),
        tags=["neynar"],
    )

    return api_router
