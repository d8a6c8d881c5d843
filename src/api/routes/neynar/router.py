"""Router principal do Neynar: agrega os endpoints do provedor."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.neynar.webhook import router as webhook_router

router = APIRouter()

# POST com eventos assinados
router.include_router(webhook_router)
