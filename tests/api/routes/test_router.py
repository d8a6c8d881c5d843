"""Testes do agregador de rotas."""

from __future__ import annotations

from api.routes import create_api_router


def _paths(webhook_path: str | None = None) -> set[tuple[str, str]]:
    router = create_api_router(webhook_path)
    return {(method, route.path) for route in router.routes for method in route.methods}


def test_default_routes() -> None:
    paths = _paths("/webhooks/neynar")

    assert ("POST", "/webhooks/neynar") in paths
    assert ("GET", "/health") in paths
    assert ("GET", "/ready") in paths
    assert ("GET", "/") in paths


def test_custom_webhook_path() -> None:
    assert ("POST", "/hooks/fc") in _paths("/hooks/fc/")
